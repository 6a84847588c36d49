"""SendGrid v2 client for sending transactional mail."""

from __future__ import annotations

import httpx
from loguru import logger

from sgmail.domain.entities.mail import Mail
from sgmail.domain.errors import TransportError
from sgmail.infrastructure.encoding import encode_mail
from sgmail.infrastructure.settings import Settings, get_settings


class SGClient:
    """
    Authenticates to the SendGrid API with a static API key and sends mail.

    The client only holds immutable configuration, so one instance can be
    shared between threads. Each send opens its own HTTP connection.
    """

    def __init__(
        self,
        api_key: str,
        *,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key or not api_key.strip():
            raise ValueError("SENDGRID_API_KEY is required")

        self._api_key = api_key
        self.settings = settings or get_settings()
        self._transport = transport
        self._async_transport = async_transport

    def __repr__(self) -> str:
        return f"SGClient(api_url={self.settings.api_url!r})"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": self.settings.user_agent,
        }

    def _body(self, mail: Mail) -> str:
        return encode_mail(mail, include_from_name=self.settings.include_from_name)

    def _log_response(self, mail: Mail, response: httpx.Response) -> None:
        recipients = len(mail.to) + len(mail.cc) + len(mail.bcc)
        if response.is_success:
            logger.info(f"Mail '{mail.subject}' sent to {recipients} recipient(s), status={response.status_code}")
        else:
            # Returned to the caller as-is; the API reports errors in the body.
            logger.warning(f"SendGrid API returned {response.status_code}: {response.text[:200]}")

    def send(self, mail: Mail) -> str:
        """
        Send a mail and return the raw response body.

        The body is returned for any HTTP status; only failures to get a
        response at all are raised.

        Raises:
            EncodingError: the mail could not be serialized
            TransportError: network, TLS or timeout failure
        """
        body = self._body(mail)

        try:
            with httpx.Client(transport=self._transport) as client:
                response = client.post(
                    self.settings.api_url,
                    headers=self._headers(),
                    content=body,
                    timeout=self.settings.request_timeout_seconds,
                )
        except httpx.HTTPError as e:
            logger.error(f"SendGrid request failed: {e}")
            raise TransportError(f"request to {self.settings.api_url} failed: {e}") from e

        self._log_response(mail, response)
        return response.text

    async def asend(self, mail: Mail) -> str:
        """Async version of send for event-loop contexts."""
        body = self._body(mail)

        try:
            async with httpx.AsyncClient(transport=self._async_transport) as client:
                response = await client.post(
                    self.settings.api_url,
                    headers=self._headers(),
                    content=body,
                    timeout=self.settings.request_timeout_seconds,
                )
        except httpx.HTTPError as e:
            logger.error(f"SendGrid request failed: {e}")
            raise TransportError(f"request to {self.settings.api_url} failed: {e}") from e

        self._log_response(mail, response)
        return response.text


# Singleton instance
_client: SGClient | None = None


def get_sendgrid_client() -> SGClient:
    """Get or create a client from SENDGRID_* settings."""
    global _client
    if _client is None:
        settings = get_settings()
        if settings.api_key is None:
            raise ValueError("SENDGRID_API_KEY is required")
        _client = SGClient(settings.api_key.get_secret_value(), settings=settings)
    return _client
