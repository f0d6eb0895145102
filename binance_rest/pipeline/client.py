"""
Binance REST 클라이언트 (서명 요청 파이프라인)

자격 증명 해석 -> 파라미터 정규화 -> 서명 -> 디스패치 -> 응답 정규화.
상품(Spot/Margin/Coin-M/Portfolio Margin)별 차이는 PipelineConfig와
후처리 훅으로 표현하고 파이프라인 자체는 하나만 존재.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from binance_rest.core.config.loader import Credentials, CredentialSource, resolve_credentials
from binance_rest.core.constants import BinanceEndpoints, Defaults
from binance_rest.core.errors import SignatureError
from binance_rest.core.results import BinanceError, ConfigMissing, Ok, Result
from binance_rest.core.types import HttpMethod, Product, SecurityType, TradingMode
from binance_rest.pipeline.dispatcher import dispatch, prepare_request
from binance_rest.pipeline.normalizer import ResultHook, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    """파이프라인 설정 (상품별)

    Attributes:
        base_url: REST 베이스 URL
        parse_rate_limits: Rate Limit 헤더 해석 여부
        recv_window: 서명 요청에 주입할 recvWindow (None이면 주입 안 함)
        timeout: 요청 타임아웃 (초)
    """

    base_url: str
    parse_rate_limits: bool = True
    recv_window: int | None = None
    timeout: float = Defaults.TIMEOUT_SEC

    @classmethod
    def for_product(
        cls,
        product: Product,
        mode: TradingMode = TradingMode.PRODUCTION,
        **kwargs: Any,
    ) -> "PipelineConfig":
        """상품/모드에 맞는 기본 설정 생성"""
        return cls(base_url=BinanceEndpoints.get_base_url(product, mode), **kwargs)


class BinanceRestClient:
    """서명 요청 파이프라인

    모든 엔드포인트 함수는 request()를 통해서만 호출하고,
    결과는 항상 Result 유니온으로 받음 (예외 없음).

    Args:
        config: 파이프라인 설정
        credentials: 자격 증명 소스 (None이면 호출마다 환경 변수에서 해석)
        http_client: 외부에서 주입하는 httpx 클라이언트 (선택)
        environ: 환경 변수 매핑 (테스트용, None이면 os.environ)
        now: 밀리초 시계 (테스트용)
    """

    def __init__(
        self,
        config: PipelineConfig,
        credentials: CredentialSource = None,
        http_client: httpx.AsyncClient | None = None,
        environ: Mapping[str, str] | None = None,
        now: Callable[[], int] | None = None,
    ):
        self.config = config
        self._credentials = credentials
        self._environ = environ
        self._now = now
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """직접 생성한 HTTP 클라이언트 종료"""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BinanceRestClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _resolve(self, security: SecurityType) -> Credentials | ConfigMissing | None:
        if not security.requires_credentials:
            return None
        return resolve_credentials(self._credentials, environ=self._environ)

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        params: Mapping[str, Any] | None = None,
        security: SecurityType = SecurityType.SIGNED,
        hooks: Iterable[ResultHook] = (),
    ) -> Result:
        """API 요청 실행

        Args:
            method: HTTP 메서드 (GET, POST, PUT, DELETE)
            path: API 경로 (예: /sapi/v1/margin/order)
            params: 요청 파라미터
            security: 보안 유형 (NONE / API_KEY / SIGNED)
            hooks: 정규화 후 순서대로 적용할 후처리 훅

        Returns:
            Ok / BinanceError / TransportError / DecodeError / ConfigMissing
        """
        method = HttpMethod(method.upper()) if isinstance(method, str) else method

        credentials = self._resolve(security)
        if isinstance(credentials, ConfigMissing):
            logger.warning(
                "자격 증명 누락, 요청 생략",
                extra={"method": method.value, "path": path},
            )
            return credentials

        try:
            prepared = prepare_request(
                method,
                self.config.base_url,
                path,
                params,
                credentials,
                security=security,
                recv_window=self.config.recv_window,
                now=self._now,
            )
        except SignatureError as e:
            logger.error(
                "서명 실패",
                extra={"method": method.value, "path": path, "error": str(e)},
            )
            return ConfigMissing(message=str(e))

        logger.debug(
            "Binance 요청",
            extra={"method": method.value, "path": path, "security": security.value},
        )

        client = await self._get_client()
        raw = await dispatch(client, prepared)
        result = normalize(raw, parse_rate_limits=self.config.parse_rate_limits)

        for hook in hooks:
            result = hook(result)

        self._log_result(method, path, result)
        return result

    @staticmethod
    def _log_result(method: HttpMethod, path: str, result: Result) -> None:
        if isinstance(result, Ok):
            if result.rate_limit is not None:
                logger.debug(
                    "Binance 응답",
                    extra={"path": path, "rate_limit": result.rate_limit.to_dict()},
                )
        elif isinstance(result, BinanceError):
            logger.warning(
                "Binance API 에러",
                extra={
                    "method": method.value,
                    "path": path,
                    "error_code": result.code,
                    "error_message": result.message,
                },
            )
        else:
            logger.warning(
                "Binance 요청 실패",
                extra={
                    "method": method.value,
                    "path": path,
                    "result": type(result).__name__,
                },
            )
