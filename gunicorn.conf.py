import multiprocessing
import os

wsgi_app = "resume_tracker.wsgi:application"

host = os.getenv("GUNICORN_HOST", "127.0.0.1")
port = os.getenv("GUNICORN_PORT", os.getenv("PORT", "8000"))
bind = f"{host}:{port}"
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
# Refinement waits on the OpenAI round trip
timeout = int(os.getenv("GUNICORN_TIMEOUT", "300"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "60"))
keepalive = 5
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
