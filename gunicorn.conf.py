# gunicorn.conf.py
import multiprocessing as mp
import os

# ASGI application served by every worker
wsgi_app = "tripplanner.app:app"

# Bind to address and port
bind = os.getenv("BIND", "0.0.0.0:8076")

# Worker class - using Uvicorn worker for ASGI apps
worker_class = "uvicorn.workers.UvicornWorker"

# The rules engine is CPU-light; itinerary requests mostly wait on the LLM
workers = int(os.getenv("WEB_CONCURRENCY", min(mp.cpu_count() + 1, 4)))

# LLM calls are bounded by LLM_REQUEST_TIMEOUT (55s by default), keep a margin above it
timeout = int(os.getenv("TIMEOUT", "75"))
graceful_timeout = int(os.getenv("GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.getenv("KEEPALIVE", "5"))

# Load the app (and its settings) once in the master process
preload_app = True

# Whitelisted IPs for X-Forwarded-For header
forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "127.0.0.1")

# Logs
accesslog = "-" if os.getenv("ACCESS_LOG", "1") == "1" else None
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
capture_output = True
