import json

import httpx
import pytest
from venuebook.domain.errors import GatewayError
from venuebook.infrastructure.gateways import HttpInvoiceGateway, HttpNotificationGateway

NOTIFY_URL = "https://backend.test/rest/v1/rpc/booking_notify_new_request"
INVOICE_URL = "https://backend.test/functions/v1/create-xendit-invoice"


def _client(handler) -> httpx.AsyncClient:  # type: ignore[no-untyped-def]
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_notify_posts_reservation_id_with_api_key() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    async with _client(handler) as client:
        gateway = HttpNotificationGateway(client, url=NOTIFY_URL, api_key="svc-key")
        await gateway.notify_new_booking(15)

    (request,) = seen
    assert str(request.url) == NOTIFY_URL
    assert json.loads(request.content) == {"p_booking_id": 15}
    assert request.headers["apikey"] == "svc-key"
    assert request.headers["authorization"] == "Bearer svc-key"


@pytest.mark.asyncio
async def test_notify_raises_gateway_error_on_server_error() -> None:
    async with _client(lambda request: httpx.Response(500, json={"message": "boom"})) as client:
        gateway = HttpNotificationGateway(client, url=NOTIFY_URL)
        with pytest.raises(GatewayError):
            await gateway.notify_new_booking(15)


@pytest.mark.asyncio
async def test_invoice_returns_payment_url() -> None:
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"invoice_url": "https://checkout.example.com/inv_9"})

    async with _client(handler) as client:
        gateway = HttpInvoiceGateway(client, url=INVOICE_URL)
        url = await gateway.create_invoice(9, 800, "Reservation fee")

    assert url == "https://checkout.example.com/inv_9"
    assert seen == [{"booking_id": 9, "amount": 800, "description": "Reservation fee"}]


@pytest.mark.asyncio
async def test_invoice_without_url_is_an_error() -> None:
    async with _client(lambda request: httpx.Response(200, json={"id": "inv_9"})) as client:
        gateway = HttpInvoiceGateway(client, url=INVOICE_URL)
        with pytest.raises(GatewayError):
            await gateway.create_invoice(9, 800, "Reservation fee")


@pytest.mark.asyncio
async def test_invoice_transport_failure_is_an_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        gateway = HttpInvoiceGateway(client, url=INVOICE_URL)
        with pytest.raises(GatewayError):
            await gateway.create_invoice(9, 800, "Reservation fee")


@pytest.mark.asyncio
async def test_misconfigured_urls_raise_gateway_error() -> None:
    async with _client(lambda request: httpx.Response(200, json={"invoice_url": "x"})) as client:
        with pytest.raises(GatewayError):
            await HttpNotificationGateway(client, url="http://[::1").notify_new_booking(15)
        with pytest.raises(GatewayError):
            await HttpInvoiceGateway(client, url="http://[::1").create_invoice(15, 800, "fee")
