"""
Portfolio Margin 클라이언트 (papi.binance.com)

하나의 계정에서 UM 선물(um), CM 선물(cm), 마진(margin) 주문을 관리.
주문 경로는 /papi/v1/{order_type}/... 형태.
"""

from collections.abc import Mapping
from typing import Any

from binance_rest.core.results import Result
from binance_rest.core.types import HttpMethod, PortfolioOrderType, Product, SecurityType
from binance_rest.models import OrderRequest
from binance_rest.pipeline.normalizer import remap_embedded_error, remap_reject_reason
from binance_rest.products.base import ProductClient
from binance_rest.products.parsers import parse_listen_key, parse_order


# 주문 수정(PUT)은 선물 계정만 지원
_UPDATABLE = (PortfolioOrderType.UM, PortfolioOrderType.CM)


def _order_type(value: PortfolioOrderType | str) -> PortfolioOrderType:
    try:
        return PortfolioOrderType(value)
    except ValueError:
        valid = [t.value for t in PortfolioOrderType]
        raise ValueError(
            f"유효하지 않은 order_type입니다: '{value}'. 유효한 값: {valid}"
        ) from None


class PortfolioMarginClient(ProductClient):
    """Binance Portfolio Margin 클라이언트"""

    product = Product.PORTFOLIO_MARGIN

    async def ping(self) -> Result:
        return await self.rest.request(
            HttpMethod.GET, "/papi/v1/ping", security=SecurityType.NONE
        )

    async def create_listen_key(self) -> Result:
        """listenKey 생성 -> str"""
        result = await self.rest.request(
            HttpMethod.POST,
            "/papi/v1/listenKey",
            security=SecurityType.API_KEY,
            hooks=(remap_embedded_error,),
        )
        return result.map(parse_listen_key)

    async def keep_alive_listen_key(self) -> Result:
        return await self.rest.request(
            HttpMethod.PUT,
            "/papi/v1/listenKey",
            security=SecurityType.API_KEY,
            hooks=(remap_embedded_error,),
        )

    async def create_order(
        self,
        order_type: PortfolioOrderType | str,
        order: OrderRequest | Mapping[str, Any],
    ) -> Result:
        """주문 생성 -> Order

        Args:
            order_type: um / cm / margin
            order: OrderRequest 또는 Binance 파라미터 매핑
        """
        kind = _order_type(order_type)
        params = order.to_params() if isinstance(order, OrderRequest) else dict(order)
        result = await self.rest.request(
            HttpMethod.POST, f"/papi/v1/{kind.value}/order", params
        )
        return result.map(parse_order)

    async def update_order(
        self,
        order_type: PortfolioOrderType | str,
        params: Mapping[str, Any],
    ) -> Result:
        """LIMIT 주문 수정 (um / cm만 지원) -> Order"""
        kind = _order_type(order_type)
        if kind not in _UPDATABLE:
            raise ValueError(f"{kind.value} 주문은 수정할 수 없습니다")

        result = await self.rest.request(
            HttpMethod.PUT, f"/papi/v1/{kind.value}/order", dict(params)
        )
        return result.map(parse_order)

    async def get_open_orders(
        self,
        order_type: PortfolioOrderType | str,
        symbol: str | None = None,
    ) -> Result:
        """오픈 주문 목록 (원본 list)"""
        kind = _order_type(order_type)
        return await self.rest.request(
            HttpMethod.GET, f"/papi/v1/{kind.value}/openOrders", {"symbol": symbol}
        )

    async def get_order(
        self,
        order_type: PortfolioOrderType | str,
        params: Mapping[str, Any],
    ) -> Result:
        """특정 주문 조회 (원본 dict)"""
        kind = _order_type(order_type)
        return await self.rest.request(
            HttpMethod.GET, f"/papi/v1/{kind.value}/order", dict(params)
        )

    async def cancel_order(
        self,
        order_type: PortfolioOrderType | str,
        params: Mapping[str, Any],
    ) -> Result:
        """주문 취소 -> Order (rejectReason 응답은 BinanceError)"""
        kind = _order_type(order_type)
        result = await self.rest.request(
            HttpMethod.DELETE,
            f"/papi/v1/{kind.value}/order",
            dict(params),
            hooks=(remap_reject_reason,),
        )
        return result.map(parse_order)

    async def cancel_all_orders(
        self,
        order_type: PortfolioOrderType | str,
        symbol: str,
    ) -> Result:
        """심볼의 모든 오픈 주문 취소 (원본 응답)"""
        kind = _order_type(order_type)
        return await self.rest.request(
            HttpMethod.DELETE,
            f"/papi/v1/{kind.value}/allOpenOrders",
            {"symbol": symbol},
            hooks=(remap_reject_reason,),
        )
