"""
Margin 클라이언트 (api.binance.com/sapi)

Cross/Isolated 마진 계정, 주문, 대출, listenKey 관리.
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
    parse_cross_collateral_info,
    parse_cross_collateral_wallet,
    parse_cross_margin_fee,
    parse_isolated_margin_account,
    parse_isolated_margin_fee,
    parse_listen_key,
    parse_margin_account,
    parse_order,
    parse_orders,
    parse_trade,
)


def _isolated_flag(is_isolated: bool | None) -> str | None:
    """isIsolated 파라미터 ("TRUE"/"FALSE", 미지정이면 None)"""
    if is_isolated is None:
        return None
    return "TRUE" if is_isolated else "FALSE"


def _order_params(
    symbol: str,
    order_id: str | int | None,
    client_order_id: str | None,
    is_isolated: bool | None,
) -> dict[str, Any]:
    params: dict[str, Any] = {"symbol": symbol, "isIsolated": _isolated_flag(is_isolated)}

    if order_id is not None:
        params["orderId"] = order_id
    elif client_order_id:
        params["origClientOrderId"] = client_order_id
    else:
        raise ValueError("order_id or client_order_id required")

    return params


class MarginClient(ProductClient):
    """Binance Margin 클라이언트"""

    product = Product.MARGIN

    # -------------------------------------------------------------------------
    # listenKey 관리
    # -------------------------------------------------------------------------

    async def create_listen_key(self) -> Result:
        """Cross 마진 listenKey 생성 -> str"""
        result = await self.rest.request(
            HttpMethod.POST,
            "/sapi/v1/userDataStream",
            security=SecurityType.API_KEY,
            hooks=(remap_embedded_error,),
        )
        return result.map(parse_listen_key)

    async def create_isolated_listen_key(self, symbol: str) -> Result:
        """격리 마진 listenKey 생성 -> str"""
        result = await self.rest.request(
            HttpMethod.POST,
            "/sapi/v1/userDataStream/isolated",
            {"symbol": symbol},
            security=SecurityType.API_KEY,
            hooks=(remap_embedded_error,),
        )
        return result.map(parse_listen_key)

    async def keep_alive_listen_key(self, listen_key: str) -> Result:
        """listenKey 유효기간 연장. 성공 시 Ok({})"""
        return await self.rest.request(
            HttpMethod.PUT,
            "/sapi/v1/userDataStream",
            {"listenKey": listen_key},
            security=SecurityType.API_KEY,
            hooks=(remap_embedded_error,),
        )

    async def keep_alive_isolated_listen_key(self, symbol: str, listen_key: str) -> Result:
        """격리 마진 listenKey 유효기간 연장"""
        return await self.rest.request(
            HttpMethod.PUT,
            "/sapi/v1/userDataStream/isolated",
            {"symbol": symbol, "listenKey": listen_key},
            security=SecurityType.API_KEY,
            hooks=(remap_embedded_error,),
        )

    # -------------------------------------------------------------------------
    # 계좌 조회
    # -------------------------------------------------------------------------

    async def get_account(self) -> Result:
        """Cross 마진 계정 -> MarginAccount"""
        result = await self.rest.request(HttpMethod.GET, "/sapi/v1/margin/account")
        return result.map(parse_margin_account)

    async def get_isolated_account(self, symbols: list[str] | None = None) -> Result:
        """격리 마진 계정 -> IsolatedMarginAccount

        Args:
            symbols: 조회할 심볼 (최대 5개, 쉼표로 연결해 전송)
        """
        params = {"symbols": ",".join(symbols) if symbols else None}
        result = await self.rest.request(
            HttpMethod.GET, "/sapi/v1/margin/isolated/account", params
        )
        return result.map(parse_isolated_margin_account)

    async def get_index_price(self, symbol: str) -> Result:
        """마진 가격 지수 (원본 dict)"""
        return await self.rest.request(
            HttpMethod.GET,
            "/sapi/v1/margin/priceIndex",
            {"symbol": symbol},
            security=SecurityType.API_KEY,
        )

    async def get_account_status(self) -> Result:
        """계정 상태 (예: {"data": "Normal"})"""
        return await self.rest.request(HttpMethod.GET, "/sapi/v1/account/status")

    async def get_cross_margin_fee(self, coin: str | None = None, vip_level: int | None = None) -> Result:
        """Cross 마진 이자/한도 -> list[CrossMarginFee]"""
        result = await self.rest.request(
            HttpMethod.GET,
            "/sapi/v1/margin/crossMarginData",
            {"coin": coin, "vipLevel": vip_level},
        )
        return result.map(lambda data: [parse_cross_margin_fee(item) for item in data])

    async def get_isolated_margin_fee(self, symbol: str | None = None, vip_level: int | None = None) -> Result:
        """격리 마진 이자/한도 -> list[IsolatedMarginFee]"""
        result = await self.rest.request(
            HttpMethod.GET,
            "/sapi/v1/margin/isolatedMarginData",
            {"symbol": symbol, "vipLevel": vip_level},
        )
        return result.map(lambda data: [parse_isolated_margin_fee(item) for item in data])

    async def get_cross_collateral_wallet(self) -> Result:
        """Cross collateral 지갑 (v2) -> CrossCollateralWallet"""
        result = await self.rest.request(HttpMethod.GET, "/sapi/v2/futures/loan/wallet")
        return result.map(parse_cross_collateral_wallet)

    async def get_cross_collateral_info(
        self,
        loan_coin: str | None = None,
        collateral_coin: str | None = None,
    ) -> Result:
        """Cross collateral 코인 설정 (v2) -> list[CrossCollateralInfo]

        Args:
            loan_coin: 대출 코인 (미지정 시 전체)
            collateral_coin: 담보 코인 (미지정 시 전체)
        """
        result = await self.rest.request(
            HttpMethod.GET,
            "/sapi/v2/futures/loan/configs",
            {"loanCoin": loan_coin, "collateralCoin": collateral_coin},
        )
        return result.map(lambda data: [parse_cross_collateral_info(item) for item in data])

    async def get_trades(
        self,
        symbol: str,
        *,
        is_isolated: bool | None = None,
        order_id: int | None = None,
        start_time: int | None = None,
        end_time: int | None = None,
        from_id: int | None = None,
        limit: int | None = None,
        recv_window: int | None = None,
    ) -> Result:
        """체결 내역 -> list[Trade]"""
        params = {
            "symbol": symbol,
            "isIsolated": _isolated_flag(is_isolated),
            "orderId": order_id,
            "startTime": start_time,
            "endTime": end_time,
            "fromId": from_id,
            "limit": limit,
            "recvWindow": recv_window,
        }
        result = await self.rest.request(HttpMethod.GET, "/sapi/v1/margin/myTrades", params)
        return result.map(lambda data: [parse_trade(item) for item in data])

    # -------------------------------------------------------------------------
    # 주문
    # -------------------------------------------------------------------------

    async def create_order(self, order: OrderRequest | Mapping[str, Any]) -> Result:
        """마진 주문 생성 -> Order

        Args:
            order: OrderRequest 또는 Binance 파라미터 매핑
        """
        params = order.to_params() if isinstance(order, OrderRequest) else dict(order)
        result = await self.rest.request(HttpMethod.POST, "/sapi/v1/margin/order", params)
        return result.map(parse_order)

    async def get_open_orders(self, symbol: str | None = None, is_isolated: bool | None = None) -> Result:
        """오픈 주문 목록 -> list[Order]"""
        result = await self.rest.request(
            HttpMethod.GET,
            "/sapi/v1/margin/openOrders",
            {"symbol": symbol, "isIsolated": _isolated_flag(is_isolated)},
        )
        return result.map(parse_orders)

    async def get_order(
        self,
        symbol: str,
        order_id: str | int | None = None,
        client_order_id: str | None = None,
        is_isolated: bool | None = None,
    ) -> Result:
        """특정 주문 조회 -> Order"""
        params = _order_params(symbol, order_id, client_order_id, is_isolated)
        result = await self.rest.request(HttpMethod.GET, "/sapi/v1/margin/order", params)
        return result.map(parse_order)

    async def cancel_order(
        self,
        symbol: str,
        order_id: str | int | None = None,
        client_order_id: str | None = None,
        is_isolated: bool | None = None,
    ) -> Result:
        """주문 취소 -> Order (rejectReason 응답은 BinanceError)"""
        params = _order_params(symbol, order_id, client_order_id, is_isolated)
        result = await self.rest.request(
            HttpMethod.DELETE,
            "/sapi/v1/margin/order",
            params,
            hooks=(remap_reject_reason,),
        )
        return result.map(parse_order)

    async def cancel_all_orders(self, symbol: str, is_isolated: bool | None = None) -> Result:
        """심볼의 모든 오픈 주문 취소 (원본 list, OCO 항목 포함 가능)"""
        return await self.rest.request(
            HttpMethod.DELETE,
            "/sapi/v1/margin/openOrders",
            {"symbol": symbol, "isIsolated": _isolated_flag(is_isolated)},
            hooks=(remap_reject_reason,),
        )

    # -------------------------------------------------------------------------
    # 대출
    # -------------------------------------------------------------------------

    async def borrow(
        self,
        asset: str,
        amount: Decimal,
        is_isolated: bool = False,
        symbol: str | None = None,
    ) -> Result:
        """마진 대출 (예: {"tranId": 100000001})

        is_isolated가 True이면 symbol 필수.
        """
        if is_isolated and not symbol:
            raise ValueError("symbol is required for isolated borrow")

        params = {
            "asset": asset,
            "amount": amount,
            "isIsolated": _isolated_flag(is_isolated),
            "symbol": symbol,
        }
        return await self.rest.request(HttpMethod.POST, "/sapi/v1/margin/loan", params)
