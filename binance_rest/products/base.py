"""
상품 파사드 공통 베이스

각 상품 클라이언트는 자신의 Product에 맞게 설정된 BinanceRestClient를
하나 보유하고, 엔드포인트 메서드는 URL/파라미터만 구성한 뒤
파이프라인 결과(Result)를 도메인 레코드로 매핑.
"""

from collections.abc import Callable, Mapping
from typing import Any, ClassVar

import httpx

from binance_rest.core.config.loader import ClientConfig, CredentialSource
from binance_rest.core.types import Product, TradingMode
from binance_rest.pipeline.client import BinanceRestClient, PipelineConfig


class ProductClient:
    """상품 파사드 베이스

    Args:
        credentials: 자격 증명 소스 (None이면 호출마다 환경 변수에서 해석)
        mode: 거래 모드 (베이스 URL 선택)
        config: 파이프라인 설정 직접 지정 (mode보다 우선)
        http_client: 외부에서 주입하는 httpx 클라이언트
        environ: 환경 변수 매핑 (테스트용)
    """

    product: ClassVar[Product]

    def __init__(
        self,
        credentials: CredentialSource = None,
        mode: TradingMode = TradingMode.PRODUCTION,
        *,
        config: PipelineConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        environ: Mapping[str, str] | None = None,
        now: Callable[[], int] | None = None,
    ):
        if config is None:
            config = PipelineConfig.for_product(self.product, mode)
        self.rest = BinanceRestClient(
            config,
            credentials=credentials,
            http_client=http_client,
            environ=environ,
            now=now,
        )

    @classmethod
    def from_config(cls, client_config: ClientConfig, **kwargs: Any) -> "ProductClient":
        """secrets.yaml에서 로드한 ClientConfig로 생성"""
        return cls(client_config.credentials, client_config.mode, **kwargs)

    async def close(self) -> None:
        await self.rest.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
