"""
Coin-M 선물 클라이언트 (dapi.binance.com)

시장 데이터, 계정/포지션, 주문, listenKey 관리.
응답 헤더의 X-MBX-USED-WEIGHT-1M / X-MBX-ORDER-COUNT-1M을 결과에 첨부.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from binance_rest.core.results import Result
from binance_rest.core.types import HttpMethod, Product, SecurityType
from binance_rest.models import OrderRequest
from binance_rest.pipeline.normalizer import remap_embedded_error, remap_reject_reason
from binance_rest.products.base import ProductClient
from binance_rest.products.parsers import (
    parse_exchange_info,
    parse_futures_account,
    parse_futures_positions,
    parse_klines,
    parse_listen_key,
    parse_order,
    parse_order_book,
    parse_orders,
    parse_server_time,
)


def _order_ref(
    symbol: str,
    order_id: str | int | None,
    client_order_id: str | None,
) -> dict[str, Any]:
    params: dict[str, Any] = {"symbol": symbol}
    if order_id is not None:
        params["orderId"] = order_id
    elif client_order_id:
        params["origClientOrderId"] = client_order_id
    else:
        raise ValueError("order_id or client_order_id required")
    return params


class CoinFuturesClient(ProductClient):
    """Binance Coin-M 선물 클라이언트"""

    product = Product.COIN_FUTURES

    async def _public(self, path: str, params: dict | None = None) -> Result:
        return await self.rest.request(
            HttpMethod.GET, path, params, security=SecurityType.NONE
        )

    # -------------------------------------------------------------------------
    # 시장 데이터
    # -------------------------------------------------------------------------

    async def ping(self) -> Result:
        return await self._public("/dapi/v1/ping")

    async def get_server_time(self) -> Result:
        """서버 시간 (epoch 밀리초)"""
        result = await self._public("/dapi/v1/time")
        return result.map(parse_server_time)

    async def get_index_price(self, symbol: str) -> Result:
        """마크 가격/펀딩 정보 (원본 dict 또는 list)"""
        return await self._public("/dapi/v1/premiumIndex", {"symbol": symbol})

    async def get_best_ticker(self, symbol: str) -> Result:
        return await self._public("/dapi/v1/ticker/bookTicker", {"symbol": symbol})

    async def get_klines(self, symbol: str, interval: str, limit: int | None = None) -> Result:
        """캔들 조회 -> list[Kline]"""
        result = await self._public(
            "/dapi/v1/klines",
            {"symbol": symbol, "interval": interval, "limit": limit},
        )
        return result.map(parse_klines)

    async def get_continuous_klines(
        self,
        pair: str,
        contract_type: str,
        interval: str,
        limit: int | None = None,
    ) -> Result:
        """연속 계약 캔들 -> list[Kline]

        Args:
            pair: 기초 자산 쌍 (예: BTCUSD)
            contract_type: PERPETUAL / CURRENT_QUARTER / NEXT_QUARTER
        """
        result = await self._public(
            "/dapi/v1/continuousKlines",
            {
                "pair": pair,
                "contractType": contract_type,
                "interval": interval,
                "limit": limit,
            },
        )
        return result.map(parse_klines)

    async def get_exchange_info(self) -> Result:
        result = await self._public("/dapi/v1/exchangeInfo")
        return result.map(parse_exchange_info)

    async def get_depth(self, symbol: str, limit: int = 100) -> Result:
        """호가창 조회 -> OrderBook"""
        result = await self._public("/dapi/v1/depth", {"symbol": symbol, "limit": limit})
        return result.map(parse_order_book)

    # -------------------------------------------------------------------------
    # listenKey 관리
    # -------------------------------------------------------------------------

    async def create_listen_key(self) -> Result:
        """listenKey 생성 -> str"""
        result = await self.rest.request(
            HttpMethod.POST,
            "/dapi/v1/listenKey",
            security=SecurityType.API_KEY,
            hooks=(remap_embedded_error,),
        )
        return result.map(parse_listen_key)

    async def keep_alive_listen_key(self) -> Result:
        """listenKey 유효기간 연장 (60분 내 호출 필요)"""
        return await self.rest.request(
            HttpMethod.PUT,
            "/dapi/v1/listenKey",
            security=SecurityType.API_KEY,
            hooks=(remap_embedded_error,),
        )

    async def delete_listen_key(self) -> Result:
        """listenKey 삭제"""
        return await self.rest.request(
            HttpMethod.DELETE,
            "/dapi/v1/listenKey",
            security=SecurityType.API_KEY,
            hooks=(remap_embedded_error,),
        )

    # -------------------------------------------------------------------------
    # 계좌 조회
    # -------------------------------------------------------------------------

    async def get_account(self) -> Result:
        """선물 계정 -> FuturesAccount"""
        result = await self.rest.request(HttpMethod.GET, "/dapi/v1/account")
        return result.map(parse_futures_account)

    async def get_positions(self, margin_asset: str | None = None, pair: str | None = None) -> Result:
        """포지션 목록 -> list[FuturesPosition]"""
        result = await self.rest.request(
            HttpMethod.GET,
            "/dapi/v1/positionRisk",
            {"marginAsset": margin_asset, "pair": pair},
        )
        return result.map(parse_futures_positions)

    # -------------------------------------------------------------------------
    # 주문
    # -------------------------------------------------------------------------

    async def create_order(self, order: OrderRequest | Mapping[str, Any]) -> Result:
        """주문 생성 -> Order"""
        params = order.to_params() if isinstance(order, OrderRequest) else dict(order)
        result = await self.rest.request(HttpMethod.POST, "/dapi/v1/order", params)
        return result.map(parse_order)

    async def update_order(
        self,
        symbol: str,
        side: str,
        quantity: Decimal,
        price: Decimal,
        order_id: str | int | None = None,
        client_order_id: str | None = None,
    ) -> Result:
        """LIMIT 주문 수정 -> Order"""
        params = _order_ref(symbol, order_id, client_order_id)
        params.update({"side": side, "quantity": quantity, "price": price})
        result = await self.rest.request(HttpMethod.PUT, "/dapi/v1/order", params)
        return result.map(parse_order)

    async def get_open_orders(self, symbol: str | None = None, pair: str | None = None) -> Result:
        """오픈 주문 목록 -> list[Order]

        Weight: 심볼 지정 시 1, 생략 시 40
        """
        result = await self.rest.request(
            HttpMethod.GET,
            "/dapi/v1/openOrders",
            {"symbol": symbol, "pair": pair},
        )
        return result.map(parse_orders)

    async def get_order(
        self,
        symbol: str,
        order_id: str | int | None = None,
        client_order_id: str | None = None,
    ) -> Result:
        """특정 주문 조회 -> Order"""
        params = _order_ref(symbol, order_id, client_order_id)
        result = await self.rest.request(HttpMethod.GET, "/dapi/v1/order", params)
        return result.map(parse_order)

    async def cancel_order(
        self,
        symbol: str,
        order_id: str | int | None = None,
        client_order_id: str | None = None,
    ) -> Result:
        """주문 취소 -> Order (rejectReason 응답은 BinanceError)"""
        params = _order_ref(symbol, order_id, client_order_id)
        result = await self.rest.request(
            HttpMethod.DELETE,
            "/dapi/v1/order",
            params,
            hooks=(remap_reject_reason,),
        )
        return result.map(parse_order)

    async def cancel_batch_orders(
        self,
        symbol: str,
        order_ids: list[int] | None = None,
        client_order_ids: list[str] | None = None,
    ) -> Result:
        """여러 주문 일괄 취소 (최대 10개, 원본 list)

        orderIdList=[1,2] 형태의 단일 토큰으로 전송.
        """
        if not order_ids and not client_order_ids:
            raise ValueError("order_ids or client_order_ids required")

        params: dict[str, Any] = {"symbol": symbol}
        if order_ids:
            params["orderIdList"] = list(order_ids)
        else:
            params["origClientOrderIdList"] = [f'"{cid}"' for cid in client_order_ids]

        return await self.rest.request(
            HttpMethod.DELETE,
            "/dapi/v1/batchOrders",
            params,
            hooks=(remap_reject_reason,),
        )

    async def cancel_all_orders(self, symbol: str) -> Result:
        """심볼의 모든 오픈 주문 취소 (예: {"code": 200, "msg": "..."})"""
        return await self.rest.request(
            HttpMethod.DELETE,
            "/dapi/v1/allOpenOrders",
            {"symbol": symbol},
            hooks=(remap_reject_reason,),
        )
