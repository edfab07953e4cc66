"""
Celery Application

Consumes the envelopes queue. Messages are acknowledged only after the task
finishes (acks_late), so an envelope whose processing did not complete is
delivered again.
"""

from celery import Celery
from celery.signals import setup_logging

from ..config import get_settings
from ..observability.logging_config import configure_logging

settings = get_settings()

celery_app = Celery(
    "bulkscan_orchestrator",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["bulkscan_orchestrator.workers.envelope_worker"],
)

celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Queue settings
    task_routes={
        "envelopes.process_envelope": {"queue": settings.ENVELOPES_QUEUE_NAME},
    },

    # Worker settings
    worker_prefetch_multiplier=1,

    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)


@setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
