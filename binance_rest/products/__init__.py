"""
상품별 엔드포인트 파사드

Spot(시장 데이터), Margin, Coin-M 선물, Portfolio Margin.
"""

from binance_rest.products.coin_futures import CoinFuturesClient
from binance_rest.products.margin import MarginClient
from binance_rest.products.portfolio_margin import PortfolioMarginClient
from binance_rest.products.spot import SpotClient

__all__ = [
    "CoinFuturesClient",
    "MarginClient",
    "PortfolioMarginClient",
    "SpotClient",
]
