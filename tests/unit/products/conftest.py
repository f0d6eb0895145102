"""
상품 클라이언트 테스트용 fixture
"""

import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def make_response():
    """httpx 응답 Mock 생성 함수"""

    def _make(payload: Any = None, status_code: int = 200, headers: dict | None = None, text: str | None = None):
        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.headers = headers or {}
        mock_response.text = text if text is not None else json.dumps(payload)
        return mock_response

    return _make


@pytest.fixture
def mock_http(make_response):
    """_get_client가 반환할 AsyncMock HTTP 클라이언트 생성 함수"""

    def _make(payload: Any = None, **kwargs: Any) -> AsyncMock:
        mock_http_client = AsyncMock()
        mock_http_client.request.return_value = make_response(payload, **kwargs)
        return mock_http_client

    return _make


@pytest.fixture
def sent_request():
    """마지막 요청의 (method, url, headers, body) 추출 함수"""

    def _extract(mock_http_client: AsyncMock) -> tuple[str, str, dict, str | None]:
        args, kwargs = mock_http_client.request.call_args
        return args[0], args[1], kwargs["headers"], kwargs["content"]

    return _extract
