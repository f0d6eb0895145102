"""
요청 디스패처

최종 URL/본문/헤더를 구성하고 HTTP 요청을 한 번 실행.
네트워크 예외는 TransportFailure로 잡아 이 경계 밖으로 던지지 않음.
재시도/백오프 없음.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

import httpx

from binance_rest.core.config.loader import Credentials
from binance_rest.core.constants import Headers
from binance_rest.core.types import HttpMethod, SecurityType
from binance_rest.pipeline.canonical import canonicalize
from binance_rest.pipeline.signer import append_signature, sign

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedRequest:
    """전송 직전의 요청

    Attributes:
        method: HTTP 메서드
        url: 최종 URL (GET/DELETE는 쿼리 스트링 포함)
        headers: 요청 헤더
        body: form 본문 (POST/PUT), GET/DELETE는 None
        canonical_query: 서명 대상 문자열 (signature 쌍 제외)
        signature: 서명 (서명하지 않은 요청은 None)
    """

    method: HttpMethod
    url: str
    headers: dict[str, str] = field(repr=False)
    body: str | None
    canonical_query: str
    signature: str | None = field(default=None, repr=False)

    @property
    def payload(self) -> str:
        """실제 전송되는 인코딩 문자열 (쿼리 또는 본문)"""
        if self.body is not None:
            return self.body
        _, _, query = self.url.partition("?")
        return query


@dataclass(frozen=True)
class TransportFailure:
    """네트워크 계층 실패 (응답 없음)"""

    cause: BaseException


@dataclass(frozen=True)
class HttpResponse:
    """HTTP 응답 원본"""

    status_code: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)


RawOutcome = Union[TransportFailure, HttpResponse]


def prepare_request(
    method: HttpMethod | str,
    base_url: str,
    path: str,
    params: Mapping[str, Any] | None,
    credentials: Credentials | None,
    security: SecurityType = SecurityType.SIGNED,
    recv_window: int | None = None,
    now: Callable[[], int] | None = None,
) -> PreparedRequest:
    """요청 구성

    - GET/DELETE: path?canonical_query[&signature=...], 본문 없음
    - POST/PUT: 본문 = canonical_query[&signature=...],
      Content-Type: application/x-www-form-urlencoded
    - API_KEY/SIGNED: X-MBX-APIKEY 헤더

    서명은 canonical_query에 대해 정확히 한 번 계산하고, 같은 문자열을
    그대로 전송한다.

    Raises:
        ValueError: 인증 요청인데 credentials가 없는 경우
        SignatureError: 서명 실패
    """
    method = HttpMethod(method.upper()) if isinstance(method, str) else method
    signed = security is SecurityType.SIGNED

    if security.requires_credentials and credentials is None:
        raise ValueError(f"{security.value} 요청에는 credentials가 필요합니다")

    canonical_query = canonicalize(
        params,
        with_timestamp=signed,
        recv_window=recv_window if signed else None,
        now=now,
    )

    signature = None
    payload = canonical_query
    if signed:
        signature = sign(credentials.api_secret, credentials.secret_kind, canonical_query)
        payload = append_signature(canonical_query, signature)

    headers: dict[str, str] = {}
    if security.requires_credentials:
        headers[Headers.API_KEY] = credentials.api_key

    url = f"{base_url.rstrip('/')}{path}"
    if method.uses_query_string:
        if payload:
            url = f"{url}?{payload}"
        body = None
    else:
        headers[Headers.CONTENT_TYPE] = Headers.FORM_URLENCODED
        body = payload

    return PreparedRequest(
        method=method,
        url=url,
        headers=headers,
        body=body,
        canonical_query=canonical_query,
        signature=signature,
    )


async def dispatch(client: httpx.AsyncClient, request: PreparedRequest) -> RawOutcome:
    """HTTP 요청 실행 (정확히 한 번)

    Args:
        client: httpx 비동기 클라이언트
        request: prepare_request() 결과

    Returns:
        HttpResponse 또는 TransportFailure
    """
    try:
        response = await client.request(
            request.method.value,
            request.url,
            headers=request.headers,
            content=request.body,
        )
    except httpx.HTTPError as e:
        logger.error(
            "Request error",
            extra={
                "method": request.method.value,
                "url": request.url.partition("?")[0],
                "error": repr(e),
            },
        )
        return TransportFailure(cause=e)

    return HttpResponse(
        status_code=response.status_code,
        body=response.text,
        headers=response.headers,
    )
