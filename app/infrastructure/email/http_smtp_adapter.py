from __future__ import annotations

from typing import Optional
import httpx

from app.domain.errors import DeliveryFailed
from app.domain.ports.email_port import EmailPort


class HttpSmtpEmailAdapter(EmailPort):
    """Posts messages to an HTTP mail relay as {to, subject, body}."""

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
        send_path: str = "/send",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._send_path = send_path if send_path.startswith("/") else f"/{send_path}"
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def send(self, *, to: str, subject: str, body: str) -> None:
        url = f"{self._base_url}{self._send_path}"
        payload = {"to": to, "subject": subject, "body": body}

        try:
            resp = await self._client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise DeliveryFailed(f"mail relay HTTP error: {e}") from e

        if not resp.is_success:
            raise DeliveryFailed(
                f"mail relay responded {resp.status_code}",
                status_code=resp.status_code,
                detail=resp.text[:200],
            )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
