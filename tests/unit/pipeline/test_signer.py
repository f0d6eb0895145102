"""
요청 서명 테스트

HMAC은 Binance API 문서 예제 값으로 검증.
RSA/Ed25519는 테스트 안에서 생성한 키로 서명 후 공개키로 검증.
"""

import base64
from urllib.parse import parse_qsl

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from binance_rest.core.errors import SignatureError
from binance_rest.core.types import SecretKind
from binance_rest.pipeline.signer import (
    append_signature,
    generate_hmac_signature,
    sign,
)


DOC_SECRET = "NhqPtmdSJYdKjVHjA7PZj4Mge3R5YNiP1e3UZjInClVN65XAbvqqM6A7H5fATj0j"
DOC_QUERY = (
    "symbol=LTCBTC&side=BUY&type=LIMIT&timeInForce=GTC&quantity=1"
    "&price=0.1&recvWindow=5000&timestamp=1499827319559"
)
DOC_SIGNATURE = "c8db56825ae71d6d79447849e617115f4a920fa2acdcab2b053c4b2838bd6b71"


def _pem(private_key) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="module")
def ed25519_key() -> Ed25519PrivateKey:
    return Ed25519PrivateKey.generate()


@pytest.fixture(scope="module")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


class TestHmacSignature:
    """HMAC-SHA256 서명 테스트"""

    def test_known_vector(self) -> None:
        """Binance 문서 예제와 일치"""
        assert generate_hmac_signature(DOC_SECRET, DOC_QUERY) == DOC_SIGNATURE

    def test_sign_hmac(self) -> None:
        assert sign(DOC_SECRET, SecretKind.HMAC, DOC_QUERY) == DOC_SIGNATURE

    def test_deterministic(self) -> None:
        """같은 입력이면 같은 서명"""
        first = sign("secret", SecretKind.HMAC, "a=1&timestamp=2")
        second = sign("secret", SecretKind.HMAC, "a=1&timestamp=2")

        assert first == second
        assert len(first) == 64

    def test_different_query_different_signature(self) -> None:
        assert sign("s", SecretKind.HMAC, "a=1") != sign("s", SecretKind.HMAC, "a=2")


class TestAsymmetricSignature:
    """RSA / Ed25519 서명 테스트"""

    def test_ed25519_verifies(self, ed25519_key: Ed25519PrivateKey) -> None:
        signature = sign(_pem(ed25519_key), SecretKind.ED25519, DOC_QUERY)

        # 검증 실패 시 InvalidSignature 발생
        ed25519_key.public_key().verify(base64.b64decode(signature), DOC_QUERY.encode())

    def test_ed25519_deterministic(self, ed25519_key: Ed25519PrivateKey) -> None:
        pem = _pem(ed25519_key)

        assert sign(pem, SecretKind.ED25519, "a=1") == sign(pem, SecretKind.ED25519, "a=1")

    def test_rsa_verifies(self, rsa_key) -> None:
        signature = sign(_pem(rsa_key), SecretKind.RSA, DOC_QUERY)

        rsa_key.public_key().verify(
            base64.b64decode(signature),
            DOC_QUERY.encode(),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )

    def test_key_kind_mismatch(self, ed25519_key: Ed25519PrivateKey) -> None:
        """Ed25519 키를 RSA로 서명하면 SignatureError"""
        with pytest.raises(SignatureError, match="RSA"):
            sign(_pem(ed25519_key), SecretKind.RSA, "a=1")

    def test_invalid_pem(self) -> None:
        with pytest.raises(SignatureError):
            sign("not a pem", SecretKind.ED25519, "a=1")


class TestAppendSignature:
    """서명 추가 테스트"""

    def test_hex_signature_appended_last(self) -> None:
        query = append_signature(DOC_QUERY, DOC_SIGNATURE)

        assert query == f"{DOC_QUERY}&signature={DOC_SIGNATURE}"

    def test_base64_signature_percent_encoded(self) -> None:
        """base64의 +, /, = 는 인코딩되고 디코딩하면 원래 값"""
        raw = "ab+c/d=="

        query = append_signature("a=1", raw)

        assert query == "a=1&signature=ab%2Bc%2Fd%3D%3D"
        assert dict(parse_qsl(query))["signature"] == raw

    def test_empty_query(self) -> None:
        assert append_signature("", "abc") == "signature=abc"
