"""Transactional email API client.

Posts messages to a Resend-compatible HTTP API.
"""

import httpx
import logfire

from fundteam.adapter.error import EmailDeliveryError
from fundteam.config import EmailSettings
from fundteam.domain.service.notification_service import EmailClient, EmailMessage


class HttpEmailClient(EmailClient):
    """Email client for a JSON email API authenticated with a bearer key."""

    def __init__(self, settings: EmailSettings) -> None:
        """Initialize email client.

        Args:
            settings: Email API settings
        """
        self.api_url = settings.api_url
        self.api_key = settings.api_key
        self.from_address = settings.from_address
        self.timeout = settings.timeout_seconds

    async def send(self, message: EmailMessage) -> str:
        """Send an email.

        Args:
            message: The email to send

        Returns:
            Message ID assigned by the API

        Raises:
            EmailDeliveryError: If the API is unreachable or rejects the message
        """
        if not self.api_key:
            raise EmailDeliveryError("Email API key is not configured")

        payload = {
            "from": self.from_address,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=self.timeout,
                )

                if response.status_code >= 400:
                    logfire.error(
                        "Email API rejected message",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise EmailDeliveryError(
                        f"Email API returned {response.status_code}"
                    )

                return str(response.json().get("id", ""))

        except httpx.HTTPError as e:
            logfire.error("Email API HTTP error", error=str(e))
            raise EmailDeliveryError(f"HTTP error sending email: {e}") from e


class MockEmailClient(EmailClient):
    """Mock email client for testing.

    Records sent messages instead of calling the API. Set ``fail_with`` to
    make every send raise.
    """

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.fail_with: Exception | None = None

    async def send(self, message: EmailMessage) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(message)
        return f"mock-{len(self.sent)}"
