# classstore/tasks/email.py
from requests import RequestException

from classstore.celery_worker import celery_app
from classstore.services.email_client import EmailClient
from classstore.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="classstore.tasks.email.send_email_task")
def send_email_task(message: dict):
    """
    Sends one prepared message. Failures are logged and not retried.
    """
    recipients = ", ".join(r["email"] for r in message.get("to", []))
    try:
        sent = EmailClient().send(message)
    except RequestException as e:
        logger.error(f"[EMAIL] '{message.get('subject')}' to {recipients} failed: {e}")
        return {"subject": message.get("subject"), "status": "failed"}

    status = "sent" if sent else "skipped"
    logger.info(f"[EMAIL] '{message.get('subject')}' to {recipients}: {status}")
    return {"subject": message.get("subject"), "status": status}
