# classstore/celery_worker.py
from celery import Celery

from classstore.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "classstore",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# explicit import so the worker registers the tasks
celery_app.conf.imports = (
    "classstore.tasks.email",
)

celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
# publishing is best-effort, do not hang a request on a dead broker
celery_app.conf.task_publish_retry = False
celery_app.conf.broker_connection_timeout = 2
celery_app.conf.task_ignore_result = True
celery_app.conf.timezone = "UTC"
