from celery import Celery

from airclaims.config import settings

app = Celery(
    "airclaims",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["airclaims.tasks.eligibility_tasks"],
)

app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    result_expires=3600,
    task_routes={
        "airclaims.tasks.eligibility_tasks.*": {"queue": "eligibility"},
    },
)
