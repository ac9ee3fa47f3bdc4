"""
Logging setup for the Stampcard service.

Call setup_logging() once, before the app is created. Modules log through
logging.getLogger(__name__).
"""
import logging
import os
import sys

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

# Libraries that are too chatty at INFO
QUIET_LOGGERS = ('werkzeug', 'sqlalchemy.engine', 'alembic')

_configured = False


def setup_logging(level: str = None) -> None:
    """Configure the root logger with a single stdout handler."""
    global _configured
    if _configured:
        return

    level_name = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level_name, logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
