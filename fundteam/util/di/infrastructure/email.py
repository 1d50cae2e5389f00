"""Email infrastructure providers."""

from dishka import Scope, provide
import logfire

from fundteam.adapter.email import HttpEmailClient
from fundteam.config import EmailSettings
from fundteam.domain.service import EmailClient
from fundteam.util.di.base import ProviderBase
from fundteam.util.observability import instrument_httpx


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider using the HTTP email API."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_client(self, email_settings: EmailSettings) -> EmailClient:
        """Provide email client.

        A missing API key is not fatal: sends fail and the failure is
        reported to callers as an email error.
        """
        if not email_settings.api_key:
            logfire.warn("EMAIL__API_KEY not set, invite emails will fail")
        instrument_httpx()
        return HttpEmailClient(email_settings)
