"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class TradingMode(str, Enum):
    """거래 모드 (실거래 / 테스트넷)"""

    PRODUCTION = "production"
    TESTNET = "testnet"


class Product(str, Enum):
    """Binance 상품군 (상품마다 REST 베이스 URL이 다름)"""

    SPOT = "SPOT"
    MARGIN = "MARGIN"
    COIN_FUTURES = "COIN_FUTURES"
    PORTFOLIO_MARGIN = "PORTFOLIO_MARGIN"


class SecretKind(str, Enum):
    """API 시크릿 종류 (서명 알고리즘 결정)"""

    HMAC = "HMAC"
    RSA = "RSA"
    ED25519 = "ED25519"


class HttpMethod(str, Enum):
    """지원하는 HTTP 메서드"""

    GET = "GET"
    DELETE = "DELETE"
    POST = "POST"
    PUT = "PUT"

    @property
    def uses_query_string(self) -> bool:
        """파라미터를 쿼리 스트링으로 보내는지 여부 (아니면 form body)"""
        return self in (HttpMethod.GET, HttpMethod.DELETE)


class SecurityType(str, Enum):
    """엔드포인트 보안 유형

    - NONE: 공개 엔드포인트 (API 키 헤더 없음, 서명 없음)
    - API_KEY: API 키 헤더만 필요 (listenKey 관리 등)
    - SIGNED: API 키 헤더 + timestamp + signature
    """

    NONE = "NONE"
    API_KEY = "API_KEY"
    SIGNED = "SIGNED"

    @property
    def requires_credentials(self) -> bool:
        return self is not SecurityType.NONE


class OrderSide(str, Enum):
    """주문 방향"""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    """주문 유형"""

    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP_MARKET = "STOP_MARKET"
    TAKE_PROFIT_MARKET = "TAKE_PROFIT_MARKET"
    STOP = "STOP"
    TAKE_PROFIT = "TAKE_PROFIT"
    STOP_LOSS = "STOP_LOSS"
    STOP_LOSS_LIMIT = "STOP_LOSS_LIMIT"
    TAKE_PROFIT_LIMIT = "TAKE_PROFIT_LIMIT"
    LIMIT_MAKER = "LIMIT_MAKER"


class OrderStatus(str, Enum):
    """주문 상태"""

    NEW = "NEW"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FILLED = "FILLED"
    CANCELED = "CANCELED"  # Binance API 사용 (미국식 철자)
    PENDING_CANCEL = "PENDING_CANCEL"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class TimeInForce(str, Enum):
    """주문 유효 기간"""

    GTC = "GTC"  # Good Till Cancel
    IOC = "IOC"  # Immediate Or Cancel
    FOK = "FOK"  # Fill Or Kill


class PortfolioOrderType(str, Enum):
    """Portfolio Margin 주문 대상 계정 (papi 경로 세그먼트)"""

    UM = "um"
    CM = "cm"
    MARGIN = "margin"
