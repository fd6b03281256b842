"""
Gunicorn configuration for the Vent Diary API.
All settings are driven from environment variables for container deployment.

    gunicorn -c ventdiary/gunicorn.conf.py ventdiary.wsgi:app
"""

from __future__ import annotations

import logging
import multiprocessing
import os

# ===== Server Binding =====
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")
backlog = int(os.environ.get("GUNICORN_BACKLOG", "2048"))

# ===== Worker Settings =====
# gthread: request handlers only block on database and SMTP round-trips
worker_class = os.environ.get("GUNICORN_WORKER_CLASS", "gthread")
workers = int(os.environ.get("GUNICORN_WORKERS", str(multiprocessing.cpu_count() * 2 + 1)))
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
max_requests = int(os.environ.get("GUNICORN_MAX_REQUESTS", "10000"))
max_requests_jitter = int(os.environ.get("GUNICORN_MAX_REQUESTS_JITTER", "1000"))

# ===== Timeout Settings =====
# PDF exports are the slowest requests
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "60"))
graceful_timeout = int(os.environ.get("GUNICORN_GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.environ.get("GUNICORN_KEEPALIVE", "5"))

# ===== Logging =====
accesslog = os.environ.get("GUNICORN_ACCESSLOG", "-")
errorlog = os.environ.get("GUNICORN_ERRORLOG", "-")
loglevel = os.environ.get("GUNICORN_LOGLEVEL", "info")
capture_output = True

access_log_format = os.environ.get(
    "GUNICORN_ACCESS_LOG_FORMAT",
    '{"timestamp": "%(t)s", "remote": "%(h)s", "request": "%(r)s", '
    '"status": %(s)s, "bytes": %(b)s, "response_time": %(D)s, "pid": %(p)s}',
)

# ===== Server Mechanics =====
daemon = False
preload_app = os.environ.get("GUNICORN_PRELOAD", "false").lower() in ("1", "true", "yes")

# ===== Security Settings =====
limit_request_line = int(os.environ.get("GUNICORN_LIMIT_REQUEST_LINE", "8190"))
limit_request_fields = int(os.environ.get("GUNICORN_LIMIT_REQUEST_FIELDS", "100"))
forwarded_allow_ips = os.environ.get("GUNICORN_FORWARDED_ALLOW_IPS", "*")

# ===== Monitoring =====
statsd_host = os.environ.get("STATSD_HOST")
if statsd_host:
    statsd_prefix = os.environ.get("STATSD_PREFIX", "ventdiary")

proc_name = os.environ.get("GUNICORN_PROC_NAME", "ventdiary")


# ===== Lifecycle Hooks =====
def on_starting(server):
    """Called just before the master process is initialized."""
    logger = logging.getLogger(__name__)
    logger.info(
        f"Gunicorn starting: workers={workers}, threads={threads}, "
        f"worker_class={worker_class}, timeout={timeout}s"
    )


def when_ready(server):
    logging.getLogger(__name__).info(f"Gunicorn ready. Listening on {bind}")


def worker_abort(worker):
    """Called when a worker is timed out and is being replaced."""
    logger = logging.getLogger(__name__)
    logger.warning(f"Worker {worker.pid} timed out (>{timeout}s), aborting")
