"""
Spot 시장 데이터 (api.binance.com/api/v3)

공개 엔드포인트만 제공 (SecurityType.NONE).
"""

from binance_rest.core.results import Result
from binance_rest.core.types import HttpMethod, Product, SecurityType
from binance_rest.products.base import ProductClient
from binance_rest.products.parsers import (
    parse_exchange_info,
    parse_klines,
    parse_order_book,
    parse_server_time,
)


class SpotClient(ProductClient):
    """Spot 공개 시장 데이터 클라이언트"""

    product = Product.SPOT

    async def _public(self, path: str, params: dict | None = None) -> Result:
        return await self.rest.request(
            HttpMethod.GET, path, params, security=SecurityType.NONE
        )

    async def ping(self) -> Result:
        """연결 확인. 성공 시 Ok({})"""
        return await self._public("/api/v3/ping")

    async def get_server_time(self) -> Result:
        """서버 시간 (epoch 밀리초)"""
        result = await self._public("/api/v3/time")
        return result.map(parse_server_time)

    async def get_exchange_info(self, symbol: str | None = None) -> Result:
        """거래 규칙/심볼 정보 -> ExchangeInfo"""
        result = await self._public("/api/v3/exchangeInfo", {"symbol": symbol})
        return result.map(parse_exchange_info)

    async def get_depth(self, symbol: str, limit: int = 100) -> Result:
        """호가창 조회 -> OrderBook"""
        result = await self._public("/api/v3/depth", {"symbol": symbol, "limit": limit})
        return result.map(parse_order_book)

    async def get_best_ticker(self, symbol: str) -> Result:
        """최우선 호가 (원본 dict)"""
        return await self._public("/api/v3/ticker/bookTicker", {"symbol": symbol})

    async def get_klines(
        self,
        symbol: str,
        interval: str,
        limit: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
    ) -> Result:
        """캔들 조회 -> list[Kline]"""
        params = {
            "symbol": symbol,
            "interval": interval,
            "limit": limit,
            "startTime": start_time,
            "endTime": end_time,
        }
        result = await self._public("/api/v3/klines", params)
        return result.map(parse_klines)
