"""
Binance API 응답 -> 도메인 레코드 변환

정상 응답에 대해서는 실패하지 않는 순수 매핑.
모든 금액/수량은 문자열에서 Decimal로 변환.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from binance_rest.models import (
    CrossCollateralInfo,
    CrossCollateralItem,
    CrossCollateralWallet,
    CrossMarginFee,
    ExchangeInfo,
    FuturesAccount,
    FuturesAssetBalance,
    FuturesPosition,
    IsolatedMarginAccount,
    IsolatedMarginFee,
    IsolatedMarginFeeItem,
    IsolatedMarginPair,
    Kline,
    MarginAccount,
    MarginAsset,
    Order,
    OrderBook,
    SymbolInfo,
    Trade,
)


def _ms_to_datetime(value: Any) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)


def _decimal_or_none(value: Any) -> Decimal | None:
    """"0" 또는 누락이면 None"""
    if value is None:
        return None
    amount = Decimal(str(value))
    return amount if amount != Decimal("0") else None


def _is_true(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


def parse_order(data: dict[str, Any]) -> Order:
    """주문 응답 -> Order 모델

    Margin POST /sapi/v1/margin/order 응답 예시:
    {
        "symbol": "BTCUSDT",
        "orderId": 2868628287,
        "clientOrderId": "7LUhU148oDLyZBEekAVrMu",
        "transactTime": 1596776743032,
        "price": "11500.00000000",
        "origQty": "0.00100000",
        "executedQty": "0.00000000",
        "cummulativeQuoteQty": "0.00000000",
        "status": "NEW",
        "timeInForce": "GTC",
        "type": "LIMIT",
        "side": "BUY",
        "isIsolated": false
    }

    Coin-M POST /dapi/v1/order 응답은 avgPrice, cumBase, reduceOnly,
    positionSide, updateTime을 추가로 포함.
    """
    # 시간 변환 (마진: transactTime, 선물: time/updateTime)
    created_at = _ms_to_datetime(data.get("time", data.get("transactTime")))
    updated_at = _ms_to_datetime(data.get("updateTime"))

    cumulative = data.get("cummulativeQuoteQty", data.get("cumQuote", data.get("cumBase")))

    is_isolated = data.get("isIsolated")

    return Order(
        order_id=str(data["orderId"]),
        client_order_id=data.get("clientOrderId", ""),
        symbol=data["symbol"],
        side=data["side"],
        order_type=data.get("type", data.get("origType", "UNKNOWN")),
        status=data["status"],
        original_qty=Decimal(data["origQty"]),
        executed_qty=Decimal(data.get("executedQty", "0")),
        price=_decimal_or_none(data.get("price")),
        avg_price=_decimal_or_none(data.get("avgPrice")),
        stop_price=_decimal_or_none(data.get("stopPrice")),
        cumulative_quote_qty=Decimal(cumulative) if cumulative is not None else None,
        time_in_force=data.get("timeInForce", "GTC"),
        reduce_only=_is_true(data.get("reduceOnly", False)),
        position_side=data.get("positionSide"),
        is_isolated=_is_true(is_isolated) if is_isolated is not None else None,
        created_at=created_at,
        updated_at=updated_at,
    )


def parse_orders(data: list[dict[str, Any]]) -> list[Order]:
    return [parse_order(item) for item in data]


def parse_futures_position(data: dict[str, Any]) -> FuturesPosition:
    """Coin-M GET /dapi/v1/positionRisk 항목 -> FuturesPosition

    {
        "symbol": "BTCUSD_PERP",
        "positionAmt": "1",
        "entryPrice": "11707.70000003",
        "markPrice": "11788.66626667",
        "unRealizedProfit": "0.00005866",
        "liquidationPrice": "6170.20509059",
        "leverage": "20",
        "marginType": "isolated",
        "positionSide": "BOTH"
    }
    """
    return FuturesPosition(
        symbol=data["symbol"],
        position_amt=Decimal(data["positionAmt"]),
        entry_price=Decimal(data.get("entryPrice", "0")),
        mark_price=Decimal(data.get("markPrice", "0")),
        unrealized_pnl=Decimal(data.get("unRealizedProfit", "0")),
        liquidation_price=_decimal_or_none(data.get("liquidationPrice")),
        leverage=int(data.get("leverage", 1)),
        margin_type=data.get("marginType", "cross").upper(),
        position_side=data.get("positionSide", "BOTH"),
    )


def parse_futures_positions(data: list[dict[str, Any]]) -> list[FuturesPosition]:
    return [parse_futures_position(item) for item in data]


def parse_futures_account(data: dict[str, Any]) -> FuturesAccount:
    """Coin-M GET /dapi/v1/account -> FuturesAccount"""
    assets = [
        FuturesAssetBalance(
            asset=item["asset"],
            wallet_balance=Decimal(item.get("walletBalance", "0")),
            unrealized_profit=Decimal(item.get("unrealizedProfit", "0")),
            margin_balance=Decimal(item.get("marginBalance", "0")),
            available_balance=Decimal(item.get("availableBalance", "0")),
        )
        for item in data.get("assets", [])
    ]
    return FuturesAccount(
        assets=assets,
        can_trade=_is_true(data.get("canTrade", False)),
        can_deposit=_is_true(data.get("canDeposit", False)),
        can_withdraw=_is_true(data.get("canWithdraw", False)),
        update_time=_ms_to_datetime(data.get("updateTime")),
    )


def parse_margin_asset(data: dict[str, Any]) -> MarginAsset:
    return MarginAsset(
        asset=data["asset"],
        free=Decimal(data.get("free", "0")),
        locked=Decimal(data.get("locked", "0")),
        borrowed=Decimal(data.get("borrowed", "0")),
        interest=Decimal(data.get("interest", "0")),
        net_asset=Decimal(data.get("netAsset", "0")),
    )


def parse_margin_account(data: dict[str, Any]) -> MarginAccount:
    """Margin GET /sapi/v1/margin/account -> MarginAccount"""
    return MarginAccount(
        borrow_enabled=_is_true(data.get("borrowEnabled", False)),
        trade_enabled=_is_true(data.get("tradeEnabled", False)),
        transfer_enabled=_is_true(data.get("transferEnabled", False)),
        margin_level=Decimal(data.get("marginLevel", "0")),
        total_asset_of_btc=Decimal(data.get("totalAssetOfBtc", "0")),
        total_liability_of_btc=Decimal(data.get("totalLiabilityOfBtc", "0")),
        total_net_asset_of_btc=Decimal(data.get("totalNetAssetOfBtc", "0")),
        user_assets=[parse_margin_asset(item) for item in data.get("userAssets", [])],
    )


def parse_isolated_margin_account(data: dict[str, Any]) -> IsolatedMarginAccount:
    """Margin GET /sapi/v1/margin/isolated/account -> IsolatedMarginAccount

    symbols 파라미터로 조회하면 total* 필드가 없음.
    """
    pairs = [
        IsolatedMarginPair(
            symbol=item["symbol"],
            base_asset=parse_margin_asset(item["baseAsset"]),
            quote_asset=parse_margin_asset(item["quoteAsset"]),
            margin_level=Decimal(item.get("marginLevel", "0")),
            enabled=_is_true(item.get("enabled", False)),
        )
        for item in data.get("assets", [])
    ]

    def _total(key: str) -> Decimal | None:
        value = data.get(key)
        return Decimal(value) if value is not None else None

    return IsolatedMarginAccount(
        assets=pairs,
        total_asset_of_btc=_total("totalAssetOfBtc"),
        total_liability_of_btc=_total("totalLiabilityOfBtc"),
        total_net_asset_of_btc=_total("totalNetAssetOfBtc"),
    )


def parse_cross_margin_fee(data: dict[str, Any]) -> CrossMarginFee:
    return CrossMarginFee(
        vip_level=int(data.get("vipLevel", 0)),
        coin=data["coin"],
        transfer_in=_is_true(data.get("transferIn", False)),
        borrowable=_is_true(data.get("borrowable", False)),
        daily_interest=Decimal(data.get("dailyInterest", "0")),
        yearly_interest=Decimal(data.get("yearlyInterest", "0")),
        borrow_limit=Decimal(data.get("borrowLimit", "0")),
        marginable_pairs=list(data.get("marginablePairs", [])),
    )


def parse_isolated_margin_fee(data: dict[str, Any]) -> IsolatedMarginFee:
    return IsolatedMarginFee(
        vip_level=int(data.get("vipLevel", 0)),
        symbol=data["symbol"],
        leverage=int(data.get("leverage", 1)),
        data=[
            IsolatedMarginFeeItem(
                coin=item["coin"],
                daily_interest=Decimal(item.get("dailyInterest", "0")),
                borrow_limit=Decimal(item.get("borrowLimit", "0")),
            )
            for item in data.get("data", [])
        ],
    )


def parse_cross_collateral_wallet(data: dict[str, Any]) -> CrossCollateralWallet:
    """Margin GET /sapi/v2/futures/loan/wallet -> CrossCollateralWallet"""
    return CrossCollateralWallet(
        asset=data.get("asset", ""),
        total_cross_collateral=Decimal(data.get("totalCrossCollateral", "0")),
        total_borrowed=Decimal(data.get("totalBorrowed", "0")),
        total_interest=Decimal(data.get("totalInterest", "0")),
        interest_free_limit=Decimal(data.get("interestFreeLimit", "0")),
        cross_collaterals=[
            CrossCollateralItem(
                loan_coin=item["loanCoin"],
                collateral_coin=item["collateralCoin"],
                locked=Decimal(item.get("locked", "0")),
                loan_amount=Decimal(item.get("loanAmount", "0")),
                current_collateral_rate=Decimal(item.get("currentCollateralRate", "0")),
                interest_free_limit_used=Decimal(item.get("interestFreeLimitUsed", "0")),
                principal_for_interest=Decimal(item.get("principalForInterest", "0")),
                interest=Decimal(item.get("interest", "0")),
            )
            for item in data.get("crossCollaterals", [])
        ],
    )


def parse_cross_collateral_info(data: dict[str, Any]) -> CrossCollateralInfo:
    return CrossCollateralInfo(
        loan_coin=data["loanCoin"],
        collateral_coin=data["collateralCoin"],
        rate=Decimal(data.get("rate", "0")),
        margin_call_collateral_rate=Decimal(data.get("marginCallCollateralRate", "0")),
        liquidation_collateral_rate=Decimal(data.get("liquidationCollateralRate", "0")),
        current_collateral_rate=Decimal(data.get("currentCollateralRate", "0")),
        interest_rate=Decimal(data.get("interestRate", "0")),
        interest_grace_period=int(data.get("interestGracePeriod", 0)),
    )

def parse_trade(data: dict[str, Any]) -> Trade:
    """Margin GET /sapi/v1/margin/myTrades 항목 -> Trade

    {
        "commission": "0.00006000",
        "commissionAsset": "BTC",
        "id": 34,
        "isBestMatch": true,
        "isBuyer": false,
        "isMaker": false,
        "orderId": 39324,
        "price": "0.02000000",
        "qty": "3.00000000",
        "symbol": "BNBBTC",
        "isIsolated": false,
        "time": 1561973357171
    }
    """
    return Trade(
        trade_id=str(data["id"]),
        order_id=str(data["orderId"]),
        symbol=data["symbol"],
        price=Decimal(data["price"]),
        quantity=Decimal(data["qty"]),
        commission=Decimal(data.get("commission", "0")),
        commission_asset=data.get("commissionAsset", ""),
        is_buyer=_is_true(data.get("isBuyer", False)),
        is_maker=_is_true(data.get("isMaker", False)),
        is_isolated=_is_true(data.get("isIsolated", False)),
        trade_time=_ms_to_datetime(data.get("time")),
    )


def parse_order_book(data: dict[str, Any]) -> OrderBook:
    """GET depth -> OrderBook (호가 항목의 세 번째 이후 값은 무시)"""
    return OrderBook(
        last_update_id=int(data["lastUpdateId"]),
        bids=[(Decimal(level[0]), Decimal(level[1])) for level in data.get("bids", [])],
        asks=[(Decimal(level[0]), Decimal(level[1])) for level in data.get("asks", [])],
    )


def parse_kline(row: list[Any]) -> Kline:
    """klines 배열 한 행 -> Kline

    [open_time, open, high, low, close, volume, close_time, quote_volume, trades, ...]
    """
    return Kline(
        open_time=_ms_to_datetime(row[0]),
        open=Decimal(row[1]),
        high=Decimal(row[2]),
        low=Decimal(row[3]),
        close=Decimal(row[4]),
        volume=Decimal(row[5]),
        close_time=_ms_to_datetime(row[6]),
        quote_volume=Decimal(row[7]),
        trades=int(row[8]),
    )


def parse_klines(data: list[list[Any]]) -> list[Kline]:
    return [parse_kline(row) for row in data]


def parse_exchange_info(data: dict[str, Any]) -> ExchangeInfo:
    """GET exchangeInfo -> ExchangeInfo

    Coin-M은 baseAsset/quoteAsset 외에 contractStatus를 사용.
    """
    symbols = [
        SymbolInfo(
            symbol=item["symbol"],
            status=item.get("status", item.get("contractStatus", "")),
            base_asset=item.get("baseAsset", ""),
            quote_asset=item.get("quoteAsset", ""),
            filters=list(item.get("filters", [])),
        )
        for item in data.get("symbols", [])
    ]
    return ExchangeInfo(
        timezone=data.get("timezone", "UTC"),
        server_time=_ms_to_datetime(data.get("serverTime")),
        symbols=symbols,
    )


def parse_server_time(data: dict[str, Any]) -> int:
    """GET time -> epoch 밀리초"""
    return int(data["serverTime"])


def parse_listen_key(data: dict[str, Any]) -> str:
    return data["listenKey"]
