"""
Middleware package for Stampcard.
"""
from .session_auth import (
    load_current_user,
    get_current_user,
    require_admin_session,
    require_establishment_access,
    require_superuser,
    set_session_cookie,
    clear_session_cookie,
)
from .request_id import init_request_id_tracking
