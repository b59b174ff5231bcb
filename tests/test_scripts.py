import httpx

from scripts.simulate import send_order


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestSendOrder:
    """Tests for the simulation's single-order sender."""

    async def test_records_accepted_order(self):
        def handler(request):
            return httpx.Response(201, json={"id": 1, "total": 20})

        async with _client(handler) as client:
            result = await send_order(client, 1, {"restaurantId": 1, "items": []}, invalid=False)

        assert result["status"] == 201
        assert result["expected"] == 201
        assert result["total"] == 20

    async def test_non_json_body_is_recorded_not_raised(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        async with _client(handler) as client:
            result = await send_order(client, 7, {"restaurantId": 1, "items": []}, invalid=True)

        assert result["order_num"] == 7
        assert result["status"] == 502
        assert result["expected"] == 400
        assert result["total"] is None

    async def test_transport_error_is_recorded(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            result = await send_order(client, 2, {"restaurantId": 1, "items": []}, invalid=False)

        assert result["status"] is None
        assert "connection refused" in result["error"]
