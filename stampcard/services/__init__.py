"""
Business logic services for Stampcard.
"""
from .redemption_service import RedemptionService, RedemptionResult
from .session_service import SessionService
from .analytics_service import AnalyticsService
from .establishment_service import EstablishmentService, EstablishmentUpdate, UNSET
from .blob_store import LocalBlobStore
from .logo_service import LogoService

__all__ = [
    'RedemptionService',
    'RedemptionResult',
    'SessionService',
    'AnalyticsService',
    'EstablishmentService',
    'EstablishmentUpdate',
    'UNSET',
    'LocalBlobStore',
    'LogoService',
]
