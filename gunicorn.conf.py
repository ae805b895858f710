"""
Gunicorn configuration.

    gunicorn -c gunicorn.conf.py run:app
"""
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# Worker configuration
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = 'sync'
# Shopify bulk sync is a single long request
timeout = int(os.getenv('GUNICORN_TIMEOUT', '120'))
keepalive = 5

# Logging
accesslog = '-'  # stdout
errorlog = '-'   # stderr
loglevel = os.getenv('LOG_LEVEL', 'info').lower()
capture_output = True

proc_name = 'punchcard'

preload_app = True
graceful_timeout = 30


def on_starting(server):
    print("[Gunicorn] Starting Punchcard server...")


def on_exit(server):
    print("[Gunicorn] Punchcard server shutting down...")
