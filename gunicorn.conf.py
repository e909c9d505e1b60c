"""Gunicorn config for deployment: gunicorn -c gunicorn.conf.py crashviz.main:app"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async workers; each builds its own copy of the merged table at startup
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))

# Startup merges four CSVs; give workers time to boot
timeout = 120
graceful_timeout = 30
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
