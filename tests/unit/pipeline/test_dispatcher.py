"""
요청 디스패처 테스트

prepare_request의 URL/본문/헤더 구성과
dispatch의 전송 및 네트워크 예외 처리.
"""

from urllib.parse import parse_qsl

import httpx
import pytest

from binance_rest.core.config.loader import Credentials
from binance_rest.core.types import HttpMethod, SecurityType
from binance_rest.pipeline.dispatcher import (
    HttpResponse,
    TransportFailure,
    dispatch,
    prepare_request,
)
from binance_rest.pipeline.signer import generate_hmac_signature


BASE_URL = "https://dapi.binance.com"


class TestPrepareRequest:
    """prepare_request 테스트"""

    def test_signed_get_puts_payload_in_query(self, credentials: Credentials, fixed_clock) -> None:
        prepared = prepare_request(
            HttpMethod.GET,
            BASE_URL,
            "/dapi/v1/order",
            {"symbol": "BTCUSD_PERP", "orderId": 1},
            credentials,
            now=fixed_clock,
        )

        assert prepared.body is None
        assert prepared.url.startswith(f"{BASE_URL}/dapi/v1/order?")
        assert prepared.canonical_query == "orderId=1&symbol=BTCUSD_PERP&timestamp=1499827319559"
        assert prepared.payload == f"{prepared.canonical_query}&signature={prepared.signature}"
        assert prepared.headers == {"X-MBX-APIKEY": "test_api_key"}

    def test_signed_post_puts_payload_in_body(self, credentials: Credentials, fixed_clock) -> None:
        prepared = prepare_request(
            "post",
            BASE_URL,
            "/dapi/v1/order",
            {"symbol": "BTCUSD_PERP", "side": "BUY"},
            credentials,
            now=fixed_clock,
        )

        assert prepared.method == HttpMethod.POST
        assert prepared.url == f"{BASE_URL}/dapi/v1/order"
        assert prepared.body == f"{prepared.canonical_query}&signature={prepared.signature}"
        assert prepared.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert prepared.headers["X-MBX-APIKEY"] == "test_api_key"

    def test_signature_covers_sent_string(self, credentials: Credentials, fixed_clock) -> None:
        """서명 대상 문자열 == 전송 문자열에서 signature 쌍을 뺀 부분"""
        prepared = prepare_request(
            HttpMethod.DELETE,
            BASE_URL,
            "/dapi/v1/batchOrders",
            {"symbol": "BTCUSD_PERP", "orderIdList": [1, 2]},
            credentials,
            now=fixed_clock,
        )

        signed_part, _, signature = prepared.payload.rpartition("&signature=")

        assert signed_part == prepared.canonical_query
        assert signature == generate_hmac_signature("test_api_secret", signed_part)

    def test_api_key_request_not_signed(self, credentials: Credentials) -> None:
        """API_KEY 요청은 헤더만 추가하고 timestamp/signature 없음"""
        prepared = prepare_request(
            HttpMethod.POST,
            "https://api.binance.com",
            "/sapi/v1/userDataStream/isolated",
            {"symbol": "BTCUSDT"},
            credentials,
            security=SecurityType.API_KEY,
        )

        assert prepared.body == "symbol=BTCUSDT"
        assert prepared.signature is None
        assert prepared.headers["X-MBX-APIKEY"] == "test_api_key"

    def test_api_key_put_without_params(self, credentials: Credentials) -> None:
        prepared = prepare_request(
            HttpMethod.PUT,
            BASE_URL,
            "/dapi/v1/listenKey",
            None,
            credentials,
            security=SecurityType.API_KEY,
        )

        assert prepared.body == ""
        assert prepared.url == f"{BASE_URL}/dapi/v1/listenKey"

    def test_public_request_has_no_credentials(self) -> None:
        prepared = prepare_request(
            HttpMethod.GET,
            BASE_URL,
            "/dapi/v1/ping",
            None,
            None,
            security=SecurityType.NONE,
        )

        assert prepared.url == f"{BASE_URL}/dapi/v1/ping"
        assert prepared.headers == {}
        assert prepared.signature is None

    def test_recv_window_only_for_signed(self, credentials: Credentials, fixed_clock) -> None:
        signed = prepare_request(
            HttpMethod.GET, BASE_URL, "/a", None, credentials,
            recv_window=5000, now=fixed_clock,
        )
        public = prepare_request(
            HttpMethod.GET, BASE_URL, "/a", None, None,
            security=SecurityType.NONE, recv_window=5000,
        )

        assert "recvWindow=5000" in signed.canonical_query
        assert public.canonical_query == ""

    def test_credentials_required(self) -> None:
        with pytest.raises(ValueError, match="credentials"):
            prepare_request(HttpMethod.GET, BASE_URL, "/a", None, None)

    def test_base_url_trailing_slash(self) -> None:
        prepared = prepare_request(
            HttpMethod.GET, f"{BASE_URL}/", "/dapi/v1/time", None, None,
            security=SecurityType.NONE,
        )

        assert prepared.url == f"{BASE_URL}/dapi/v1/time"


class TestDispatch:
    """dispatch 테스트 (httpx.MockTransport 사용)"""

    @pytest.mark.asyncio
    async def test_query_sent_byte_for_byte(self, credentials: Credentials, fixed_clock) -> None:
        """GET 쿼리 스트링이 서명한 문자열 그대로 전송됨"""
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, text="{}")

        prepared = prepare_request(
            HttpMethod.GET,
            "https://api.binance.com",
            "/sapi/v1/margin/isolated/account",
            {"symbols": ["BTCUSDT", "ETHUSDT"]},
            credentials,
            now=fixed_clock,
        )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            outcome = await dispatch(client, prepared)

        assert isinstance(outcome, HttpResponse)
        assert outcome.status_code == 200
        assert captured[0].method == "GET"
        assert captured[0].url.query.decode("ascii") == prepared.payload
        assert captured[0].headers["X-MBX-APIKEY"] == "test_api_key"
        assert captured[0].content == b""

    @pytest.mark.asyncio
    async def test_body_sent_byte_for_byte(self, credentials: Credentials, fixed_clock) -> None:
        """POST 본문이 서명한 문자열 그대로 전송됨"""
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, text='{"orderId": 1}')

        prepared = prepare_request(
            HttpMethod.POST,
            "https://api.binance.com",
            "/sapi/v1/margin/order",
            {"symbol": "BTCUSDT", "side": "BUY", "type": "MARKET", "quantity": "0.001"},
            credentials,
            now=fixed_clock,
        )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            outcome = await dispatch(client, prepared)

        request = captured[0]
        assert request.content.decode("ascii") == prepared.payload
        assert request.url.query == b""
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert dict(parse_qsl(request.content.decode()))["symbol"] == "BTCUSDT"
        assert outcome.body == '{"orderId": 1}'

    @pytest.mark.asyncio
    async def test_response_headers_kept(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="{}", headers={"X-MBX-USED-WEIGHT-1M": "7"})

        prepared = prepare_request(
            HttpMethod.GET, BASE_URL, "/dapi/v1/ping", None, None,
            security=SecurityType.NONE,
        )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            outcome = await dispatch(client, prepared)

        assert outcome.headers["x-mbx-used-weight-1m"] == "7"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
        ],
    )
    async def test_network_error_becomes_transport_failure(self, error: httpx.HTTPError) -> None:
        """네트워크 예외는 던지지 않고 TransportFailure로 반환"""

        def handler(request: httpx.Request) -> httpx.Response:
            raise error

        prepared = prepare_request(
            HttpMethod.GET, BASE_URL, "/dapi/v1/ping", None, None,
            security=SecurityType.NONE,
        )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            outcome = await dispatch(client, prepared)

        assert isinstance(outcome, TransportFailure)
        assert outcome.cause is error
