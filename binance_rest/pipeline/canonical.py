"""
파라미터 정규화 (canonical query string)

서명 대상 문자열과 실제 전송 문자열이 바이트 단위로 같아야 하므로
이 모듈이 만든 문자열을 그대로 서명하고 그대로 전송한다.
"""

import time
from collections.abc import Callable, Mapping
from decimal import Decimal
from enum import Enum
from typing import Any
from urllib.parse import urlencode


TIMESTAMP_KEY = "timestamp"
RECV_WINDOW_KEY = "recvWindow"
SIGNATURE_KEY = "signature"


def current_timestamp_ms() -> int:
    """현재 epoch 밀리초"""
    return int(time.time() * 1000)


def _stringify_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        # 지수 표기(1E+2) 방지
        return format(value, "f")
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f")
    return str(value)


def stringify_value(value: Any) -> str:
    """파라미터 값을 문자열로 변환

    리스트/튜플은 반복 키가 아닌 하나의 토큰 "[v1,v2,...]"으로 변환.
    """
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_stringify_scalar(item) for item in value) + "]"
    return _stringify_scalar(value)


def canonicalize(
    params: Mapping[str, Any] | None,
    *,
    with_timestamp: bool = True,
    recv_window: int | None = None,
    now: Callable[[], int] | None = None,
) -> str:
    """파라미터 매핑 -> application/x-www-form-urlencoded 문자열

    - 키 정렬 순서로 출력 (입력 순서 무관, 결정적)
    - None 값은 제외
    - 호출자가 timestamp를 주지 않았으면 이 시점에 주입
    - signature 키는 항상 제외 (서명은 append_signature로만 추가)

    Args:
        params: 논리 파라미터
        with_timestamp: timestamp 주입 여부 (서명 요청)
        recv_window: recvWindow 주입 값 (없으면 주입하지 않음)
        now: 밀리초 시계 (테스트용)

    Returns:
        서명 및 전송에 그대로 사용할 쿼리 문자열
    """
    items: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None or key == SIGNATURE_KEY:
            continue
        items[str(key)] = stringify_value(value)

    if with_timestamp and TIMESTAMP_KEY not in items:
        clock = now or current_timestamp_ms
        items[TIMESTAMP_KEY] = str(clock())

    if recv_window is not None and RECV_WINDOW_KEY not in items:
        items[RECV_WINDOW_KEY] = str(recv_window)

    return urlencode(sorted(items.items()))
