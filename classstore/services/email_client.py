# classstore/services/email_client.py
import requests

from classstore.utils.settings import BREVO_API_KEY, BREVO_API_URL, EMAIL_TIMEOUT_SECONDS
from classstore.utils.logging import get_logger

logger = get_logger(__name__)


class EmailClient:
    """
    Thin client for the Brevo transactional email API.
    No retries: a failed send is logged by the caller and dropped.
    """

    def __init__(self, api_key: str | None = None, api_url: str | None = None, timeout: float | None = None):
        self.api_key = BREVO_API_KEY if api_key is None else api_key
        self.api_url = api_url or BREVO_API_URL
        self.timeout = timeout or EMAIL_TIMEOUT_SECONDS

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def send(self, message: dict) -> bool:
        """
        message: {"to": [{"email", "name"}], "sender": {...}, "subject", "html"}
        Returns False when no API key is configured.
        """
        if not self.enabled:
            logger.warning(f"BREVO_API_KEY not set, email '{message.get('subject')}' not sent")
            return False

        logger.info(f"EmailClient POST {self.api_url} subject='{message.get('subject')}'")

        resp = requests.post(
            self.api_url,
            headers={"api-key": self.api_key, "accept": "application/json"},
            json={
                "sender": message["sender"],
                "to": message["to"],
                "subject": message["subject"],
                "htmlContent": message["html"],
            },
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return True
