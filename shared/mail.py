"""
Outgoing email through SendGrid.

The SendGrid client is blocking, so sends run in the default executor and
are awaited by the caller. There is no retry.
"""

import asyncio
import logging
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from .exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class Mailer:
    """Sends HTML email from a fixed sender address."""

    def __init__(self, api_key: str, from_email: str, client: Optional[SendGridAPIClient] = None):
        self._from_email = from_email
        self._client = client
        if self._client is None and api_key:
            self._client = SendGridAPIClient(api_key)

    @property
    def configured(self) -> bool:
        """Whether a SendGrid client is available."""
        return self._client is not None

    async def send(self, to: str, subject: str, html: str) -> None:
        """
        Send an HTML email.

        Without an API key the message is dropped with a warning so local
        development works without SendGrid.

        Raises:
            ExternalServiceError: If SendGrid rejects the message or is unreachable
        """
        if not self.configured:
            logger.warning("SendGrid not configured, dropping email %r to %s", subject, to)
            return

        message = Mail(
            from_email=self._from_email,
            to_emails=to,
            subject=subject,
            html_content=html,
        )

        try:
            loop = asyncio.get_running_loop()
            response = await loop.run_in_executor(None, self._client.send, message)
        except Exception as e:
            logger.exception("SendGrid send failed for %s", to)
            raise ExternalServiceError(
                "Email delivery failed",
                service="mail",
                code="MAIL_FAILED",
            ) from e

        logger.info("Email %r sent to %s, status %s", subject, to, response.status_code)
