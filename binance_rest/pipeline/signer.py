"""
요청 서명

- HMAC: HMAC-SHA256, 16진수 소문자
- RSA: PKCS#1 v1.5 + SHA-256, base64
- ED25519: Ed25519, base64

순수 함수. 같은 입력이면 항상 같은 서명 (HMAC, ED25519).
"""

import base64
import hashlib
import hmac
from urllib.parse import urlencode

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from cryptography.hazmat.primitives.serialization import load_pem_private_key

from binance_rest.core.errors import SignatureError
from binance_rest.core.types import SecretKind
from binance_rest.pipeline.canonical import SIGNATURE_KEY


def generate_hmac_signature(secret: str, payload: str) -> str:
    """HMAC-SHA256 서명 생성

    Args:
        secret: API 시크릿
        payload: URL 인코딩된 파라미터 문자열

    Returns:
        16진수 서명 문자열 (64자)
    """
    return hmac.new(
        secret.encode("utf-8"),
        payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def _load_private_key(pem: str):
    try:
        return load_pem_private_key(pem.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SignatureError(f"개인키를 읽을 수 없습니다: {e}") from e


def sign(secret: str, secret_kind: SecretKind, canonical_query: str) -> str:
    """정규화된 쿼리 문자열 서명

    Args:
        secret: HMAC 시크릿 또는 PEM 개인키
        secret_kind: 서명 알고리즘
        canonical_query: canonicalize() 결과 (전송 문자열과 동일)

    Returns:
        서명 문자열

    Raises:
        SignatureError: 개인키 형식이 secret_kind와 맞지 않는 경우
    """
    if secret_kind is SecretKind.HMAC:
        return generate_hmac_signature(secret, canonical_query)

    payload = canonical_query.encode("utf-8")
    private_key = _load_private_key(secret)

    if secret_kind is SecretKind.RSA:
        if not isinstance(private_key, RSAPrivateKey):
            raise SignatureError("RSA 개인키가 아닙니다")
        signature = private_key.sign(payload, padding.PKCS1v15(), hashes.SHA256())
    elif secret_kind is SecretKind.ED25519:
        if not isinstance(private_key, Ed25519PrivateKey):
            raise SignatureError("Ed25519 개인키가 아닙니다")
        signature = private_key.sign(payload)
    else:
        raise SignatureError(f"지원하지 않는 서명 방식: {secret_kind}")

    return base64.b64encode(signature).decode("ascii")


def append_signature(canonical_query: str, signature: str) -> str:
    """서명을 마지막 signature=<값> 쌍으로 추가

    base64 서명의 +, /, = 는 퍼센트 인코딩됨. 16진수 서명은 그대로.
    """
    pair = urlencode({SIGNATURE_KEY: signature})
    if not canonical_query:
        return pair
    return f"{canonical_query}&{pair}"
