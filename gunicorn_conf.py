# gunicorn_conf.py
# gunicorn -c gunicorn_conf.py "playgate.main:create_app()"
from playgate.config import Settings

settings = Settings()

bind = f"{settings.host}:{settings.port}"

# Worker Options
# sessions are held in memory, so a second worker would not see them
workers = 1
worker_class = "uvicorn.workers.UvicornWorker"

# Logging Options
loglevel = settings.log_level.lower()
accesslog = "/tmp/playgate_access.log"
errorlog = "/tmp/playgate_error.log"
