"""
Binance REST 클라이언트

Spot / Margin / Coin-M 선물 / Portfolio Margin REST API용
서명 요청 파이프라인과 상품별 파사드.
모든 호출은 Result(Ok / BinanceError / TransportError / DecodeError /
ConfigMissing)를 반환하고 예외를 던지지 않음.
"""

from binance_rest.core.config import ClientConfig, Credentials, load_secrets, resolve_credentials
from binance_rest.core.results import (
    BinanceError,
    ConfigMissing,
    DecodeError,
    Ok,
    RateLimitSnapshot,
    Result,
    TransportError,
    is_ok,
)
from binance_rest.core.types import HttpMethod, Product, SecretKind, SecurityType, TradingMode
from binance_rest.pipeline import BinanceRestClient, PipelineConfig
from binance_rest.products import (
    CoinFuturesClient,
    MarginClient,
    PortfolioMarginClient,
    SpotClient,
)

__all__ = [
    # Config
    "ClientConfig",
    "Credentials",
    "load_secrets",
    "resolve_credentials",
    # Results
    "BinanceError",
    "ConfigMissing",
    "DecodeError",
    "Ok",
    "RateLimitSnapshot",
    "Result",
    "TransportError",
    "is_ok",
    # Types
    "HttpMethod",
    "Product",
    "SecretKind",
    "SecurityType",
    "TradingMode",
    # Pipeline
    "BinanceRestClient",
    "PipelineConfig",
    # Products
    "CoinFuturesClient",
    "MarginClient",
    "PortfolioMarginClient",
    "SpotClient",
]
