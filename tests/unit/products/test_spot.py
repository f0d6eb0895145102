"""
SpotClient 테스트 (공개 엔드포인트)
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from binance_rest.core.results import DecodeError, Ok
from binance_rest.core.types import TradingMode
from binance_rest.products.spot import SpotClient


@pytest.fixture
def client() -> SpotClient:
    """자격 증명 없는 클라이언트 (공개 엔드포인트 전용)"""
    return SpotClient(environ={})


class TestSpotClient:
    """Spot 시장 데이터 테스트"""

    @pytest.mark.asyncio
    async def test_ping(self, client: SpotClient, mock_http, sent_request) -> None:
        with patch.object(client.rest, "_get_client") as mock_get_client:
            mock_http_client = mock_http({})
            mock_get_client.return_value = mock_http_client

            result = await client.ping()

        assert result == Ok({})
        method, url, headers, body = sent_request(mock_http_client)
        assert (method, url, headers, body) == ("GET", "https://api.binance.com/api/v3/ping", {}, None)

    @pytest.mark.asyncio
    async def test_get_depth(self, client: SpotClient, mock_http, sent_request) -> None:
        with patch.object(client.rest, "_get_client") as mock_get_client:
            mock_http_client = mock_http({
                "lastUpdateId": 1027024,
                "bids": [["4.00000000", "431.00000000"]],
                "asks": [["4.00000200", "12.00000000"]],
            })
            mock_get_client.return_value = mock_http_client

            result = await client.get_depth("BNBBTC", limit=5)

        assert result.payload.bids[0] == (Decimal("4"), Decimal("431"))
        _, url, _, _ = sent_request(mock_http_client)
        assert url == "https://api.binance.com/api/v3/depth?limit=5&symbol=BNBBTC"

    @pytest.mark.asyncio
    async def test_get_exchange_info_without_symbol(self, client: SpotClient, mock_http, sent_request) -> None:
        with patch.object(client.rest, "_get_client") as mock_get_client:
            mock_http_client = mock_http({"timezone": "UTC", "serverTime": 1565246363776, "symbols": []})
            mock_get_client.return_value = mock_http_client

            result = await client.get_exchange_info()

        assert result.payload.symbols == []
        _, url, _, _ = sent_request(mock_http_client)
        assert url == "https://api.binance.com/api/v3/exchangeInfo"

    @pytest.mark.asyncio
    async def test_get_klines(self, client: SpotClient, mock_http, sent_request) -> None:
        row = [1499040000000, "0.01634790", "0.80000000", "0.01575800", "0.01577100",
               "148976.11427815", 1499644799999, "2434.19055334", 308]

        with patch.object(client.rest, "_get_client") as mock_get_client:
            mock_http_client = mock_http([row])
            mock_get_client.return_value = mock_http_client

            result = await client.get_klines("BNBBTC", "1d", start_time=1499040000000)

        assert result.payload[0].volume == Decimal("148976.11427815")
        _, url, _, _ = sent_request(mock_http_client)
        assert "startTime=1499040000000" in url
        assert "endTime" not in url

    @pytest.mark.asyncio
    async def test_html_error_page(self, client: SpotClient, mock_http) -> None:
        with patch.object(client.rest, "_get_client") as mock_get_client:
            mock_get_client.return_value = mock_http(status_code=503, text="<html>Service Unavailable</html>")

            result = await client.get_server_time()

        assert isinstance(result, DecodeError)

    @pytest.mark.asyncio
    async def test_context_manager(self) -> None:
        async with SpotClient(mode=TradingMode.TESTNET) as client:
            assert client.rest.config.base_url == "https://testnet.binance.vision"
