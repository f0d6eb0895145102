"""
응답 정규화

RawOutcome을 정확히 하나의 결과 유형으로 분류:
TransportError / BinanceError / DecodeError / Ok.
Rate Limit 헤더는 분류와 무관하게 해석하여 모든 결과에 첨부.
"""

import json
from collections.abc import Callable
from typing import Any

from binance_rest.core.results import (
    BinanceError,
    DecodeError,
    Ok,
    RateLimitSnapshot,
    Result,
    TransportError,
)
from binance_rest.pipeline.dispatcher import HttpResponse, RawOutcome, TransportFailure


# rejectReason만 있고 코드가 없는 취소 거부 응답에 사용하는 코드 (CANCEL_REJECTED)
CANCEL_REJECTED_CODE = -2011

ErrorShape = Callable[[Any, int], tuple[int, str] | None]
ResultHook = Callable[[Result], Result]


class UnexpectedErrorPayload(ValueError):
    """에러 상태 코드인데 알려진 에러 형태가 아닌 본문"""
    pass


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code <= 299


def _as_error_code(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def code_and_message(payload: Any, status_code: int) -> tuple[int, str] | None:
    """{"code": -1100, "msg": "..."} 형태"""
    if not isinstance(payload, dict) or "msg" not in payload:
        return None
    code = _as_error_code(payload.get("code"))
    if code is None:
        return None
    return code, str(payload["msg"])


def message_only(payload: Any, status_code: int) -> tuple[int, str] | None:
    """{"msg": "..."} 형태 (일부 상품은 숫자 코드 생략) - 상태 코드로 대체"""
    if not isinstance(payload, dict) or "msg" not in payload:
        return None
    return status_code, str(payload["msg"])


# 순서대로 시도
ERROR_SHAPES: tuple[ErrorShape, ...] = (code_and_message, message_only)


def _decode(body: str) -> Any:
    return json.loads(body)


def _normalize_error(
    response: HttpResponse,
    rate_limit: RateLimitSnapshot | None,
) -> Result:
    try:
        payload = _decode(response.body)
    except ValueError as e:
        return DecodeError(cause=e, body=response.body, rate_limit=rate_limit)

    for shape in ERROR_SHAPES:
        matched = shape(payload, response.status_code)
        if matched is not None:
            code, message = matched
            return BinanceError(
                code=code,
                message=message,
                rate_limit=rate_limit,
                payload=payload,
            )

    return DecodeError(
        cause=UnexpectedErrorPayload(
            f"HTTP {response.status_code} 응답에 에러 코드/메시지가 없습니다"
        ),
        body=response.body,
        rate_limit=rate_limit,
    )


def normalize(raw: RawOutcome, *, parse_rate_limits: bool = True) -> Result:
    """RawOutcome -> Result

    Args:
        raw: dispatch() 결과
        parse_rate_limits: Rate Limit 헤더 해석 여부

    Returns:
        Ok / BinanceError / TransportError / DecodeError 중 하나
    """
    if isinstance(raw, TransportFailure):
        return TransportError(cause=raw.cause)

    rate_limit = RateLimitSnapshot.from_headers(raw.headers) if parse_rate_limits else None

    if not is_success_status(raw.status_code):
        return _normalize_error(raw, rate_limit)

    if not raw.body.strip():
        return Ok(payload={}, rate_limit=rate_limit)

    try:
        payload = _decode(raw.body)
    except ValueError as e:
        return DecodeError(cause=e, body=raw.body, rate_limit=rate_limit)

    return Ok(payload=payload, rate_limit=rate_limit)


# -------------------------------------------------------------------------
# 상품별 후처리 훅 (성공 응답 안에 담긴 거부/에러를 BinanceError로 변환)
# -------------------------------------------------------------------------

def remap_reject_reason(result: Result) -> Result:
    """200 응답이지만 rejectReason이 있으면 BinanceError로 변환 (주문 취소)"""
    if not isinstance(result, Ok):
        return result
    payload = result.payload
    if not isinstance(payload, dict) or "rejectReason" not in payload:
        return result

    code = _as_error_code(payload.get("code"))
    return BinanceError(
        code=CANCEL_REJECTED_CODE if code is None else code,
        message=str(payload.get("msg", payload["rejectReason"])),
        rate_limit=result.rate_limit,
        payload=payload,
    )


def remap_embedded_error(result: Result) -> Result:
    """200 응답 본문이 {"code", "msg"} 에러 형태면 BinanceError로 변환 (listenKey)"""
    if not isinstance(result, Ok):
        return result
    matched = code_and_message(result.payload, 200)
    if matched is None:
        return result

    code, message = matched
    return BinanceError(
        code=code,
        message=message,
        rate_limit=result.rate_limit,
        payload=result.payload,
    )
