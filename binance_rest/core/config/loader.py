"""
설정 로더

자격 증명 해석(명시적 값 / 환경 변수) 및 secrets.yaml 로드.
프로세스 전역 상태 없이 호출마다 해석하거나, 호출자가 결과를 보관.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

from binance_rest.core.constants import BinanceEndpoints, EnvVars, Paths
from binance_rest.core.results import ConfigMissing
from binance_rest.core.types import Product, SecretKind, TradingMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """API 자격 증명

    불변 데이터 구조. 시크릿은 repr에 노출하지 않음.

    Attributes:
        api_key: API 키 (X-MBX-APIKEY 헤더)
        api_secret: HMAC 시크릿 또는 PEM 개인키 (RSA/ED25519)
        secret_kind: 서명 알고리즘
    """

    api_key: str
    api_secret: str = field(repr=False)
    secret_kind: SecretKind = SecretKind.HMAC


@dataclass(frozen=True)
class ClientConfig:
    """클라이언트 설정 (secrets.yaml에서 로드)

    거래 모드와 자격 증명을 함께 보관.
    """

    mode: TradingMode
    credentials: Credentials

    def base_url(self, product: Product) -> str:
        """현재 모드의 상품별 REST 베이스 URL"""
        return BinanceEndpoints.get_base_url(product, self.mode)


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


CredentialSource = Union[Credentials, Mapping[str, Any], None]


def _is_present(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_header_safe(value: str) -> bool:
    """X-MBX-APIKEY 헤더로 보낼 수 있는 값 (ASCII, 개행/제어 문자 없음)"""
    return value.isascii() and value.isprintable()


def _parse_secret_kind(value: Any) -> SecretKind | None:
    if value is None:
        return SecretKind.HMAC
    if isinstance(value, SecretKind):
        return value
    if isinstance(value, str):
        try:
            return SecretKind(value.upper())
        except ValueError:
            return None
    return None


def resolve_credentials(
    config: Any = None,
    environ: Mapping[str, str] | None = None,
) -> Credentials | ConfigMissing:
    """자격 증명 해석

    - None: 환경 변수(BINANCE_API_KEY, BINANCE_API_SECRET)에서 읽음
    - Credentials: 검증 후 그대로 사용
    - 매핑: api_key, api_secret(또는 secret_key), secret_kind(선택)

    예외를 던지지 않고 실패 시 ConfigMissing 반환.

    Args:
        config: 자격 증명 소스
        environ: 환경 변수 매핑 (None이면 os.environ)

    Returns:
        Credentials 또는 ConfigMissing
    """
    if config is None:
        env = os.environ if environ is None else environ
        api_key = env.get(EnvVars.API_KEY)
        api_secret = env.get(EnvVars.API_SECRET)
        kind = env.get(EnvVars.SECRET_KIND)
    elif isinstance(config, Credentials):
        api_key = config.api_key
        api_secret = config.api_secret
        kind = config.secret_kind
    elif isinstance(config, Mapping):
        api_key = config.get("api_key")
        api_secret = config.get("api_secret")
        if api_secret is None:
            api_secret = config.get("secret_key")
        kind = config.get("secret_kind")
    else:
        logger.error(
            "잘못된 자격 증명 설정",
            extra={"config_type": type(config).__name__},
        )
        return ConfigMissing()

    if not _is_present(api_key) or not _is_present(api_secret):
        return ConfigMissing()

    if not _is_header_safe(api_key):
        logger.error("API 키에 헤더로 보낼 수 없는 문자가 있습니다")
        return ConfigMissing("API key contains non-ASCII or control characters")

    secret_kind = _parse_secret_kind(kind)
    if secret_kind is None:
        return ConfigMissing(f"Unsupported secret kind: {kind!r}")

    return Credentials(api_key=api_key, api_secret=api_secret, secret_kind=secret_kind)


def load_secrets(path: Path | None = None) -> ClientConfig:
    """secrets.yaml 파일 로드

    형식:
        mode: testnet
        production:
          api_key: "..."
          api_secret: "..."
        testnet:
          api_key: "..."
          private_key_path: "keys/testnet_ed25519.pem"
          secret_kind: ED25519

    private_key_path는 secrets.yaml 기준 상대 경로도 허용.

    Args:
        path: secrets.yaml 경로 (None이면 BINANCE_REST_SECRETS_FILE 또는 ./config/secrets.yaml)

    Returns:
        ClientConfig 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 mode인 경우
    """
    if path is None:
        path = Paths.secrets_file()

    if not path.exists():
        raise SecretsLoadError(f"secrets.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SecretsLoadError(f"secrets.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SecretsLoadError("secrets.yaml이 비어 있습니다")
    if not isinstance(data, dict):
        raise SecretsLoadError("secrets.yaml 최상위는 매핑이어야 합니다")

    # mode 검증
    mode_str = data.get("mode")
    if mode_str is None:
        raise SecretsLoadError("secrets.yaml에 'mode' 필드가 없습니다")

    try:
        mode = TradingMode(mode_str)
    except ValueError as e:
        valid_modes = [m.value for m in TradingMode]
        raise ValueError(
            f"유효하지 않은 mode입니다: '{mode_str}'. "
            f"유효한 값: {valid_modes}"
        ) from e

    # 해당 모드의 API 키 로드
    mode_config = data.get(mode.value)
    if not isinstance(mode_config, dict):
        raise SecretsLoadError(
            f"secrets.yaml에 '{mode.value}' 설정이 없습니다"
        )

    api_key = mode_config.get("api_key")
    api_secret = mode_config.get("api_secret")
    key_path = mode_config.get("private_key_path")

    if not api_key:
        raise SecretsLoadError(
            f"secrets.yaml의 {mode.value} 섹션에 'api_key'가 없습니다"
        )

    if not api_secret and key_path:
        pem_path = Path(key_path)
        if not pem_path.is_absolute():
            pem_path = path.parent / pem_path
        try:
            api_secret = pem_path.read_text(encoding="utf-8")
        except OSError as e:
            raise SecretsLoadError(f"개인키 파일을 읽을 수 없습니다: {pem_path}") from e

    if not api_secret:
        raise SecretsLoadError(
            f"secrets.yaml의 {mode.value} 섹션에 'api_secret'가 없습니다"
        )

    secret_kind = _parse_secret_kind(mode_config.get("secret_kind"))
    if secret_kind is None:
        raise SecretsLoadError(
            f"지원하지 않는 secret_kind입니다: {mode_config.get('secret_kind')!r}"
        )

    return ClientConfig(
        mode=mode,
        credentials=Credentials(
            api_key=str(api_key),
            api_secret=str(api_secret),
            secret_kind=secret_kind,
        ),
    )
