"""Gunicorn config for serving crime_analytics.main:app."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async workers - each loads its own copy of the incident table
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))

# The Excel report endpoint rebuilds every summary
timeout = 120

graceful_timeout = 30

keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"

wsgi_app = "crime_analytics.main:app"
