"""
Gunicorn configuration for the TaskFlow API.

Usage:
    gunicorn taskflow.main:app -c gunicorn.conf.py

Overridable from the environment: PORT, WEB_CONCURRENCY, GUNICORN_TIMEOUT.
"""

import multiprocessing
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

# Each worker opens its own SQLAlchemy pool (pool_size 5, max_overflow 10)
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

# Attachment uploads (up to MAX_UPLOAD_BYTES) are streamed inside the request
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = 30
keepalive = 5

# Trust X-Forwarded-* from the reverse proxy in front of the API
forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "127.0.0.1")

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
