"""Gunicorn settings for the booking API (gunicorn -c gunicorn.conf.py wsgi:application)."""

import os

bind = os.environ.get('BIND', '0.0.0.0:8000')

# One SQLite writer at a time; bookings queue on BEGIN IMMEDIATE
workers = int(os.environ.get('WEB_CONCURRENCY', 2))
threads = int(os.environ.get('GUNICORN_THREADS', 4))
worker_class = 'gthread'

# Must exceed DATABASE_TIMEOUT so a queued booking is answered, not killed
timeout = 30
graceful_timeout = 20

# Logs go to stdout/stderr unless a directory is given
_log_dir = os.environ.get('GUNICORN_LOG_DIR')
accesslog = os.path.join(_log_dir, 'access.log') if _log_dir else '-'
errorlog = os.path.join(_log_dir, 'error.log') if _log_dir else '-'
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')

proc_name = 'kaitori-booking'

# Schema setup runs lazily per worker on the first request
preload_app = False

max_requests = 1000
max_requests_jitter = 50
