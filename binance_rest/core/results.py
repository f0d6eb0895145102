"""
정규화된 요청 결과

모든 엔드포인트 호출은 아래 다섯 가지 중 정확히 하나를 반환:
- Ok: 성공 (payload + rate limit)
- BinanceError: 거래소가 거부한 요청 (code, message)
- TransportError: 네트워크 계층 실패
- DecodeError: 응답 본문 해석 실패
- ConfigMissing: 자격 증명 누락 (네트워크 호출 전 단락)

rate_limit은 HTTP 응답이 있었던 모든 결과(에러 포함)에 첨부됨.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, NoReturn, TypeVar, Union

from binance_rest.core.constants import Headers
from binance_rest.core.errors import (
    BinanceApiError,
    ConfigMissingError,
    ResponseDecodeError,
    TransportFailureError,
)


T = TypeVar("T")
U = TypeVar("U")

HeaderSource = Union[Mapping[str, str], Iterable[tuple[str, str]], None]


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate Limit 스냅샷 (정보 제공용, 로컬에서 강제하지 않음)

    Binance Rate Limit 헤더 (대소문자 무관):
    - X-MBX-ORDER-COUNT-1M: 1분간 주문 수
    - X-MBX-USED-WEIGHT-1M: 1분간 사용된 요청 가중치

    값은 헤더 원문 그대로 문자열로 보관.
    """

    used_order_count_1m: str | None = None
    used_weight_1m: str | None = None

    @classmethod
    def from_headers(cls, headers: HeaderSource) -> "RateLimitSnapshot | None":
        """응답 헤더에서 스냅샷 생성

        Args:
            headers: 매핑(httpx.Headers 포함) 또는 (이름, 값) 쌍 목록

        Returns:
            두 헤더 중 하나라도 있으면 스냅샷, 없으면 None
        """
        if headers is None:
            return None

        pairs = headers.items() if isinstance(headers, Mapping) else headers

        order_count = None
        weight = None
        for name, value in pairs:
            upper = name.upper()
            if upper == Headers.USED_ORDER_COUNT_1M:
                order_count = value
            elif upper == Headers.USED_WEIGHT_1M:
                weight = value

        if order_count is None and weight is None:
            return None
        return cls(used_order_count_1m=order_count, used_weight_1m=weight)

    def to_dict(self) -> dict[str, str | None]:
        """딕셔너리로 변환 (로깅용)"""
        return {
            "used_order_count_1m": self.used_order_count_1m,
            "used_weight_1m": self.used_weight_1m,
        }


@dataclass(frozen=True)
class Ok(Generic[T]):
    """성공 결과"""

    ok: ClassVar[bool] = True

    payload: T
    rate_limit: RateLimitSnapshot | None = None

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        """payload를 도메인 레코드로 변환 (rate_limit 유지)"""
        return Ok(payload=fn(self.payload), rate_limit=self.rate_limit)

    def unwrap(self) -> T:
        return self.payload


class _Failure(ABC):
    """실패 결과 공통 동작"""

    ok: ClassVar[bool] = False

    def map(self, fn: Callable[[Any], Any]) -> "_Failure":
        return self

    @abstractmethod
    def to_exception(self) -> Exception:
        """결과를 대응하는 예외로 변환"""

    def unwrap(self) -> NoReturn:
        raise self.to_exception()


@dataclass(frozen=True)
class BinanceError(_Failure):
    """거래소가 보고한 에러

    Attributes:
        code: Binance 에러 코드 (코드가 없는 응답은 HTTP 상태 코드)
        message: Binance 에러 메시지 (원문 유지)
        rate_limit: Rate Limit 스냅샷
        payload: 디코딩된 원본 응답 (진단용)
    """

    code: int
    message: str
    rate_limit: RateLimitSnapshot | None = None
    payload: Any = field(default=None, compare=False)

    def to_exception(self) -> BinanceApiError:
        return BinanceApiError(code=self.code, message=self.message)


@dataclass(frozen=True)
class TransportError(_Failure):
    """네트워크 계층 실패 (응답 자체가 없음)"""

    cause: BaseException

    @property
    def rate_limit(self) -> None:
        return None

    def to_exception(self) -> TransportFailureError:
        return TransportFailureError(self.cause)


@dataclass(frozen=True)
class DecodeError(_Failure):
    """응답 본문 해석 실패

    Attributes:
        cause: 원본 파싱 예외
        body: 해석하지 못한 응답 본문
        rate_limit: Rate Limit 스냅샷
    """

    cause: BaseException
    body: str = ""
    rate_limit: RateLimitSnapshot | None = None

    def to_exception(self) -> ResponseDecodeError:
        return ResponseDecodeError(self.cause, self.body)


@dataclass(frozen=True)
class ConfigMissing(_Failure):
    """자격 증명 누락 - 네트워크 호출 없이 반환"""

    message: str = "Secret or API key missing"

    @property
    def rate_limit(self) -> None:
        return None

    def to_exception(self) -> ConfigMissingError:
        return ConfigMissingError(self.message)


Result = Union[Ok[Any], BinanceError, TransportError, DecodeError, ConfigMissing]


def is_ok(result: Result) -> bool:
    """성공 결과 여부"""
    return isinstance(result, Ok)
