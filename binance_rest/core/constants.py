"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

import os
from pathlib import Path

from binance_rest.core.types import Product, TradingMode


class BinanceEndpoints:
    """Binance REST 베이스 URL (고정값)

    Spot과 Margin은 같은 호스트(api.binance.com)를 공유.
    Portfolio Margin은 테스트넷이 없음.
    """

    # Production
    SPOT_REST_URL: str = "https://api.binance.com"
    COIN_FUTURES_REST_URL: str = "https://dapi.binance.com"
    PORTFOLIO_MARGIN_REST_URL: str = "https://papi.binance.com"

    # Testnet
    SPOT_TEST_REST_URL: str = "https://testnet.binance.vision"
    COIN_FUTURES_TEST_REST_URL: str = "https://testnet.binancefuture.com"

    _URLS: dict[tuple[Product, TradingMode], str] = {
        (Product.SPOT, TradingMode.PRODUCTION): SPOT_REST_URL,
        (Product.MARGIN, TradingMode.PRODUCTION): SPOT_REST_URL,
        (Product.COIN_FUTURES, TradingMode.PRODUCTION): COIN_FUTURES_REST_URL,
        (Product.PORTFOLIO_MARGIN, TradingMode.PRODUCTION): PORTFOLIO_MARGIN_REST_URL,
        (Product.SPOT, TradingMode.TESTNET): SPOT_TEST_REST_URL,
        (Product.MARGIN, TradingMode.TESTNET): SPOT_TEST_REST_URL,
        (Product.COIN_FUTURES, TradingMode.TESTNET): COIN_FUTURES_TEST_REST_URL,
    }

    @classmethod
    def get_base_url(cls, product: Product, mode: TradingMode = TradingMode.PRODUCTION) -> str:
        """상품과 모드에 맞는 REST 베이스 URL 반환

        Raises:
            ValueError: 해당 모드를 지원하지 않는 상품인 경우
        """
        try:
            return cls._URLS[(product, mode)]
        except KeyError:
            raise ValueError(
                f"{product.value} 상품은 {mode.value} 모드를 지원하지 않습니다"
            ) from None


class Headers:
    """요청/응답 헤더 이름"""

    API_KEY: str = "X-MBX-APIKEY"
    CONTENT_TYPE: str = "Content-Type"
    FORM_URLENCODED: str = "application/x-www-form-urlencoded"

    # Rate Limit 헤더 (대소문자 무관 비교, 1분 윈도우)
    USED_ORDER_COUNT_1M: str = "X-MBX-ORDER-COUNT-1M"
    USED_WEIGHT_1M: str = "X-MBX-USED-WEIGHT-1M"


class EnvVars:
    """환경 변수 이름"""

    API_KEY: str = "BINANCE_API_KEY"
    API_SECRET: str = "BINANCE_API_SECRET"
    SECRET_KIND: str = "BINANCE_SECRET_KIND"  # 선택 (기본 HMAC)

    # 기본 경로 재지정 (선택)
    SECRETS_FILE: str = "BINANCE_REST_SECRETS_FILE"
    LOG_DIR: str = "BINANCE_REST_LOG_DIR"


class Defaults:
    """기본값 상수"""

    TIMEOUT_SEC: float = 30.0
    LOG_LEVEL: str = "INFO"


class Paths:
    """기본 경로 (pathlib 사용 - OS 독립적)

    라이브러리 설치 위치가 아닌 호출 시점의 작업 디렉토리 기준.
    환경 변수로 재지정 가능.
    """

    CONFIG_DIR_NAME: str = "config"
    LOGS_DIR_NAME: str = "logs"
    SECRETS_FILE_NAME: str = "secrets.yaml"

    @classmethod
    def secrets_file(cls) -> Path:
        """기본 secrets.yaml 경로 (BINANCE_REST_SECRETS_FILE 또는 ./config/secrets.yaml)"""
        override = os.environ.get(EnvVars.SECRETS_FILE)
        if override:
            return Path(override)
        return Path.cwd() / cls.CONFIG_DIR_NAME / cls.SECRETS_FILE_NAME

    @classmethod
    def logs_dir(cls) -> Path:
        """기본 로그 디렉토리 (BINANCE_REST_LOG_DIR 또는 ./logs)"""
        override = os.environ.get(EnvVars.LOG_DIR)
        if override:
            return Path(override)
        return Path.cwd() / cls.LOGS_DIR_NAME
