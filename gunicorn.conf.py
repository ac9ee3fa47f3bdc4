"""
Gunicorn configuration for the Stampcard service.
"""
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# Worker configuration
# Each worker holds its own SQLAlchemy pool (DB_POOL_SIZE connections)
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = 'sync'
timeout = 30
keepalive = 5

# Logging
accesslog = '-'  # stdout
errorlog = '-'   # stderr
loglevel = os.getenv('LOG_LEVEL', 'info')
capture_output = True

proc_name = 'stampcard'

preload_app = True

graceful_timeout = 30


def on_starting(server):
    server.log.info("Starting Stampcard server...")


def on_exit(server):
    server.log.info("Stampcard server shutting down...")
