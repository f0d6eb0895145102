"""
설정 패키지

자격 증명 해석과 secrets.yaml 로더.
"""

from binance_rest.core.config.loader import (
    ClientConfig,
    CredentialSource,
    Credentials,
    SecretsLoadError,
    load_secrets,
    resolve_credentials,
)

__all__ = [
    "ClientConfig",
    "CredentialSource",
    "Credentials",
    "SecretsLoadError",
    "load_secrets",
    "resolve_credentials",
]
