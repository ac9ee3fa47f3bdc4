"""
Stampcard service entry point.
"""
import os
import sys
import logging

from stampcard import create_app

logger = logging.getLogger('stampcard.run')

config_name = os.getenv('FLASK_ENV', 'production')

try:
    app = create_app(config_name)
except Exception:
    logger.exception('FATAL ERROR during app creation')
    sys.exit(1)

if __name__ == '__main__':
    app.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000)),
        debug=os.getenv('FLASK_ENV') == 'development'
    )
