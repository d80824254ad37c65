from celery import Celery

from luxe_estate.core.config import get_settings

settings = get_settings()

celery_app = Celery(
    "luxe_estate",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["luxe_estate.workers.tasks"],
)
celery_app.conf.update(
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,
    task_ignore_result=True,
)
