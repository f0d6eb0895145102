"""
pytest 공통 fixture 정의

자격 증명, secrets.yaml, 고정 시계.
"""

import tempfile
from pathlib import Path

import pytest

from binance_rest.core.config.loader import Credentials


# Binance API 문서의 HMAC 예제 키/시크릿
DOC_API_KEY = "vmPUZE6mv9SD5VNHk4HlWFsOr6aKE2zvsw0MuIgwCIPy6utIco14y7Ju91duEh8A"
DOC_API_SECRET = "NhqPtmdSJYdKjVHjA7PZj4Mge3R5YNiP1e3UZjInClVN65XAbvqqM6A7H5fATj0j"
FIXED_TIMESTAMP = 1499827319559


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def credentials() -> Credentials:
    """테스트용 HMAC 자격 증명"""
    return Credentials(api_key="test_api_key", api_secret="test_api_secret")


@pytest.fixture
def doc_credentials() -> Credentials:
    """Binance 문서 예제 자격 증명"""
    return Credentials(api_key=DOC_API_KEY, api_secret=DOC_API_SECRET)


@pytest.fixture
def fixed_clock():
    """항상 같은 timestamp를 반환하는 시계"""
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    secrets_content = """# 테스트용 secrets.yaml
mode: testnet

production:
  api_key: "prod_api_key_12345"
  api_secret: "prod_api_secret_67890"

testnet:
  api_key: "test_api_key_abcde"
  api_secret: "test_api_secret_fghij"
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_production(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성 (production 모드)"""
    secrets_content = """mode: production

production:
  api_key: "prod_api_key_12345"
  api_secret: "prod_api_secret_67890"

testnet:
  api_key: "test_api_key_abcde"
  api_secret: "test_api_secret_fghij"
"""
    secrets_path = temp_dir / "secrets_prod.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_invalid_mode(temp_dir: Path) -> Path:
    """잘못된 모드의 secrets.yaml 파일 생성"""
    secrets_content = """mode: invalid_mode

production:
  api_key: "prod_api_key"
  api_secret: "prod_api_secret"
"""
    secrets_path = temp_dir / "secrets_invalid.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path
