"""
도메인 레코드

Binance 응답을 표준화한 불변 모델.
모든 금액/수량은 Decimal 타입 사용.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from binance_rest.core.types import OrderStatus, OrderType, TimeInForce


@dataclass(frozen=True)
class Order:
    """주문 정보 (Spot/Margin/Coin-M/Portfolio Margin 공통)

    Attributes:
        order_id: 거래소 주문 ID
        client_order_id: 클라이언트 주문 ID
        symbol: 거래 심볼
        side: 주문 방향 (BUY/SELL)
        order_type: 주문 유형
        status: 주문 상태
        original_qty: 원래 주문 수량
        executed_qty: 체결된 수량
        price: 지정가 (LIMIT 주문)
        avg_price: 평균 체결가 (선물)
        stop_price: 트리거 가격
        cumulative_quote_qty: 누적 체결 금액
        time_in_force: 주문 유효 기간
        reduce_only: 포지션 축소 전용 여부 (선물)
        position_side: 포지션 방향 (선물)
        is_isolated: 격리 마진 여부 (마진, 응답에 없으면 None)
        created_at: 주문 생성 시간
        updated_at: 주문 업데이트 시간
    """

    order_id: str
    client_order_id: str
    symbol: str
    side: str
    order_type: str
    status: str
    original_qty: Decimal
    executed_qty: Decimal = Decimal("0")
    price: Decimal | None = None
    avg_price: Decimal | None = None
    stop_price: Decimal | None = None
    cumulative_quote_qty: Decimal | None = None
    time_in_force: str = TimeInForce.GTC.value
    reduce_only: bool = False
    position_side: str | None = None
    is_isolated: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def remaining_qty(self) -> Decimal:
        """잔여 수량"""
        return self.original_qty - self.executed_qty

    @property
    def is_open(self) -> bool:
        """오픈 주문 여부 (NEW 또는 PARTIALLY_FILLED)"""
        return self.status in (
            OrderStatus.NEW.value,
            OrderStatus.PARTIALLY_FILLED.value,
        )


@dataclass(frozen=True)
class FuturesPosition:
    """Coin-M 선물 포지션"""

    symbol: str
    position_amt: Decimal
    entry_price: Decimal
    mark_price: Decimal
    unrealized_pnl: Decimal
    liquidation_price: Decimal | None
    leverage: int
    margin_type: str
    position_side: str


@dataclass(frozen=True)
class FuturesAssetBalance:
    """Coin-M 선물 계정의 자산별 잔고"""

    asset: str
    wallet_balance: Decimal
    unrealized_profit: Decimal
    margin_balance: Decimal
    available_balance: Decimal


@dataclass(frozen=True)
class FuturesAccount:
    """Coin-M 선물 계정"""

    assets: list[FuturesAssetBalance]
    can_trade: bool
    can_deposit: bool
    can_withdraw: bool
    update_time: datetime | None = None


@dataclass(frozen=True)
class MarginAsset:
    """마진 계정 자산"""

    asset: str
    free: Decimal
    locked: Decimal
    borrowed: Decimal
    interest: Decimal
    net_asset: Decimal


@dataclass(frozen=True)
class MarginAccount:
    """Cross 마진 계정"""

    borrow_enabled: bool
    trade_enabled: bool
    transfer_enabled: bool
    margin_level: Decimal
    total_asset_of_btc: Decimal
    total_liability_of_btc: Decimal
    total_net_asset_of_btc: Decimal
    user_assets: list[MarginAsset] = field(default_factory=list)


@dataclass(frozen=True)
class IsolatedMarginPair:
    """격리 마진 심볼별 계정"""

    symbol: str
    base_asset: MarginAsset
    quote_asset: MarginAsset
    margin_level: Decimal
    enabled: bool


@dataclass(frozen=True)
class IsolatedMarginAccount:
    """격리 마진 계정"""

    assets: list[IsolatedMarginPair]
    total_asset_of_btc: Decimal | None = None
    total_liability_of_btc: Decimal | None = None
    total_net_asset_of_btc: Decimal | None = None


@dataclass(frozen=True)
class CrossMarginFee:
    """Cross 마진 이자/한도 정보"""

    vip_level: int
    coin: str
    transfer_in: bool
    borrowable: bool
    daily_interest: Decimal
    yearly_interest: Decimal
    borrow_limit: Decimal
    marginable_pairs: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class IsolatedMarginFeeItem:
    coin: str
    daily_interest: Decimal
    borrow_limit: Decimal


@dataclass(frozen=True)
class IsolatedMarginFee:
    """격리 마진 이자/한도 정보"""

    vip_level: int
    symbol: str
    leverage: int
    data: list[IsolatedMarginFeeItem] = field(default_factory=list)


@dataclass(frozen=True)
class CrossCollateralItem:
    """Cross collateral 지갑의 대출/담보 쌍"""

    loan_coin: str
    collateral_coin: str
    locked: Decimal
    loan_amount: Decimal
    current_collateral_rate: Decimal
    interest_free_limit_used: Decimal
    principal_for_interest: Decimal
    interest: Decimal


@dataclass(frozen=True)
class CrossCollateralWallet:
    """Cross collateral 지갑 (v2)

    Attributes:
        asset: 합계 표시 자산 (예: USD)
        total_cross_collateral: 담보 평가액 합계
        total_borrowed: 대출 합계
        total_interest: 이자 합계
        interest_free_limit: 무이자 한도
        cross_collaterals: 대출/담보 쌍 목록
    """

    asset: str
    total_cross_collateral: Decimal
    total_borrowed: Decimal
    total_interest: Decimal
    interest_free_limit: Decimal
    cross_collaterals: list[CrossCollateralItem] = field(default_factory=list)


@dataclass(frozen=True)
class CrossCollateralInfo:
    """Cross collateral 대출/담보 코인 설정 (v2)"""

    loan_coin: str
    collateral_coin: str
    rate: Decimal
    margin_call_collateral_rate: Decimal
    liquidation_collateral_rate: Decimal
    current_collateral_rate: Decimal
    interest_rate: Decimal
    interest_grace_period: int


@dataclass(frozen=True)
class Trade:
    """마진 체결 내역"""

    trade_id: str
    order_id: str
    symbol: str
    price: Decimal
    quantity: Decimal
    commission: Decimal
    commission_asset: str
    is_buyer: bool
    is_maker: bool
    is_isolated: bool
    trade_time: datetime | None = None


@dataclass(frozen=True)
class OrderBook:
    """호가창 스냅샷 (가격, 수량)"""

    last_update_id: int
    bids: list[tuple[Decimal, Decimal]]
    asks: list[tuple[Decimal, Decimal]]


@dataclass(frozen=True)
class Kline:
    """캔들"""

    open_time: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    close_time: datetime
    quote_volume: Decimal
    trades: int


@dataclass(frozen=True)
class SymbolInfo:
    symbol: str
    status: str
    base_asset: str
    quote_asset: str
    filters: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class ExchangeInfo:
    """거래소 정보"""

    timezone: str
    server_time: datetime | None
    symbols: list[SymbolInfo] = field(default_factory=list)

    def get_symbol(self, symbol: str) -> SymbolInfo | None:
        for info in self.symbols:
            if info.symbol == symbol:
                return info
        return None


@dataclass
class OrderRequest:
    """주문 요청

    create_order 메서드에 전달되는 주문 요청 정보.

    Attributes:
        symbol: 거래 심볼
        side: 주문 방향
        order_type: 주문 유형
        quantity: 주문 수량
        price: 지정가 (LIMIT 주문 필수)
        stop_price: 트리거 가격 (STOP 주문 필수)
        client_order_id: 클라이언트 주문 ID (선택)
        time_in_force: 주문 유효 기간
        reduce_only: 포지션 축소 전용 여부 (선물)
        position_side: 포지션 방향 (Hedge Mode)
        is_isolated: 격리 마진 주문 여부 (마진)
    """

    symbol: str
    side: str  # BUY / SELL
    order_type: str  # MARKET / LIMIT / STOP_MARKET 등
    quantity: Decimal
    price: Decimal | None = None
    stop_price: Decimal | None = None
    client_order_id: str | None = None
    time_in_force: str = TimeInForce.GTC.value
    reduce_only: bool = False
    position_side: str | None = None  # LONG / SHORT (Hedge Mode)
    is_isolated: bool | None = None

    def __post_init__(self) -> None:
        """유효성 검증"""
        # 수량은 양수여야 함
        if self.quantity <= Decimal("0"):
            raise ValueError("quantity must be positive")

        # LIMIT 주문은 가격 필수
        if self.order_type == OrderType.LIMIT.value and self.price is None:
            raise ValueError("price is required for LIMIT orders")

        # STOP 주문은 stop_price 필수
        stop_types = (
            OrderType.STOP_MARKET.value,
            OrderType.TAKE_PROFIT_MARKET.value,
            OrderType.STOP.value,
            OrderType.TAKE_PROFIT.value,
        )
        if self.order_type in stop_types and self.stop_price is None:
            raise ValueError("stop_price is required for STOP orders")

    @classmethod
    def market(
        cls,
        symbol: str,
        side: str,
        quantity: Decimal,
        client_order_id: str | None = None,
        reduce_only: bool = False,
    ) -> "OrderRequest":
        """시장가 주문 생성"""
        return cls(
            symbol=symbol,
            side=side,
            order_type=OrderType.MARKET.value,
            quantity=quantity,
            client_order_id=client_order_id,
            reduce_only=reduce_only,
        )

    @classmethod
    def limit(
        cls,
        symbol: str,
        side: str,
        quantity: Decimal,
        price: Decimal,
        client_order_id: str | None = None,
        time_in_force: str = TimeInForce.GTC.value,
        is_isolated: bool | None = None,
    ) -> "OrderRequest":
        """지정가 주문 생성"""
        return cls(
            symbol=symbol,
            side=side,
            order_type=OrderType.LIMIT.value,
            quantity=quantity,
            price=price,
            client_order_id=client_order_id,
            time_in_force=time_in_force,
            is_isolated=is_isolated,
        )

    def to_params(self) -> dict[str, Any]:
        """API 요청 파라미터로 변환"""
        result: dict[str, Any] = {
            "symbol": self.symbol,
            "side": self.side,
            "type": self.order_type,
            "quantity": self.quantity,
        }

        if self.price is not None:
            result["price"] = self.price

        if self.stop_price is not None:
            result["stopPrice"] = self.stop_price

        if self.client_order_id is not None:
            result["newClientOrderId"] = self.client_order_id

        if self.order_type == OrderType.LIMIT.value:
            result["timeInForce"] = self.time_in_force

        if self.reduce_only:
            result["reduceOnly"] = "true"

        if self.position_side is not None:
            result["positionSide"] = self.position_side

        if self.is_isolated is not None:
            result["isIsolated"] = "TRUE" if self.is_isolated else "FALSE"

        return result
