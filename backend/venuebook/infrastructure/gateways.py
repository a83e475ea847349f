from __future__ import annotations

from typing import Any

import httpx

from ..domain.errors import GatewayError
from ..domain.repositories import InvoiceGateway, NotificationGateway


def _auth_headers(api_key: str) -> dict[str, str]:
    if not api_key:
        return {}
    return {"apikey": api_key, "Authorization": f"Bearer {api_key}"}


class HttpNotificationGateway(NotificationGateway):
    """Calls the owner-notification RPC for a newly created pending reservation."""

    def __init__(self, client: httpx.AsyncClient, *, url: str, api_key: str = "") -> None:
        self.client = client
        self.url = url
        self.api_key = api_key

    async def notify_new_booking(self, reservation_id: int) -> None:
        try:
            response = await self.client.post(
                self.url,
                json={"p_booking_id": reservation_id},
                headers=_auth_headers(self.api_key),
            )
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GatewayError(f"notify_new_booking failed: {exc}") from exc


class HttpInvoiceGateway(InvoiceGateway):
    """Creates a payment invoice and returns the URL the payer is sent to."""

    def __init__(self, client: httpx.AsyncClient, *, url: str, api_key: str = "") -> None:
        self.client = client
        self.url = url
        self.api_key = api_key

    async def create_invoice(self, reservation_id: int, amount: int, description: str) -> str:
        try:
            response = await self.client.post(
                self.url,
                json={"booking_id": reservation_id, "amount": amount, "description": description},
                headers=_auth_headers(self.api_key),
            )
            response.raise_for_status()
            payload: Any = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise GatewayError(f"create_invoice failed: {exc}") from exc

        invoice_url = payload.get("invoice_url") if isinstance(payload, dict) else None
        if not invoice_url:
            raise GatewayError("create_invoice returned no invoice_url")
        return str(invoice_url)
