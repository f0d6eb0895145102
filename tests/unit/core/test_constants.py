"""
상수 및 로깅 설정 테스트
"""

import logging
from pathlib import Path

import pytest

import binance_rest
from binance_rest.core.constants import BinanceEndpoints, EnvVars, Paths
from binance_rest.core.logging import NOISY_LOGGERS, get_log_file_path, setup_logging
from binance_rest.core.types import Product, TradingMode


class TestBinanceEndpoints:
    """상품/모드별 베이스 URL 테스트"""

    @pytest.mark.parametrize(
        "product, mode, expected",
        [
            (Product.SPOT, TradingMode.PRODUCTION, "https://api.binance.com"),
            (Product.MARGIN, TradingMode.PRODUCTION, "https://api.binance.com"),
            (Product.COIN_FUTURES, TradingMode.PRODUCTION, "https://dapi.binance.com"),
            (Product.PORTFOLIO_MARGIN, TradingMode.PRODUCTION, "https://papi.binance.com"),
            (Product.SPOT, TradingMode.TESTNET, "https://testnet.binance.vision"),
            (Product.COIN_FUTURES, TradingMode.TESTNET, "https://testnet.binancefuture.com"),
        ],
    )
    def test_get_base_url(self, product: Product, mode: TradingMode, expected: str) -> None:
        assert BinanceEndpoints.get_base_url(product, mode) == expected

    def test_portfolio_margin_has_no_testnet(self) -> None:
        with pytest.raises(ValueError, match="PORTFOLIO_MARGIN"):
            BinanceEndpoints.get_base_url(Product.PORTFOLIO_MARGIN, TradingMode.TESTNET)


class TestPaths:
    """기본 경로 테스트 (설치 위치가 아닌 작업 디렉토리 기준)"""

    @pytest.fixture(autouse=True)
    def clear_path_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(EnvVars.SECRETS_FILE, raising=False)
        monkeypatch.delenv(EnvVars.LOG_DIR, raising=False)

    def test_defaults_follow_cwd(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(temp_dir)
        root = temp_dir.resolve()

        assert Paths.secrets_file() == root / "config" / "secrets.yaml"
        assert Paths.logs_dir() == root / "logs"
        assert get_log_file_path("main") == root / "logs" / "main.log"

    def test_env_overrides(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        secrets = temp_dir / "elsewhere" / "keys.yaml"
        logs = temp_dir / "var" / "log"
        monkeypatch.setenv(EnvVars.SECRETS_FILE, str(secrets))
        monkeypatch.setenv(EnvVars.LOG_DIR, str(logs))

        assert Paths.secrets_file() == secrets
        assert Paths.logs_dir() == logs

    def test_not_inside_installed_package(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """기본 경로가 패키지 설치 위치(site-packages 등) 아래를 가리키지 않음"""
        install_root = Path(binance_rest.__file__).resolve().parent.parent
        monkeypatch.chdir(temp_dir)

        assert install_root not in Paths.secrets_file().resolve().parents
        assert install_root not in Paths.logs_dir().resolve().parents


class TestSetupLogging:
    """setup_logging 테스트"""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        """setup_logging이 추가한 핸들러 정리"""
        root = logging.getLogger()
        level = root.level
        yield
        for handler in list(root.handlers):
            if type(handler).__module__.startswith("_pytest"):
                continue
            root.removeHandler(handler)
            handler.close()
        root.setLevel(level)

    def test_creates_log_file(self, temp_dir: Path) -> None:
        setup_logging("test_process", log_dir=temp_dir)

        assert get_log_file_path("test_process", temp_dir).exists()

    def test_noisy_loggers_lowered(self, temp_dir: Path) -> None:
        """httpx 로거는 WARNING (URL에 서명이 포함되므로)"""
        setup_logging("test_process", log_dir=temp_dir)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_replaces_existing_handlers(self, temp_dir: Path) -> None:
        setup_logging("first", log_dir=temp_dir)
        setup_logging("second", log_dir=temp_dir)

        assert len(logging.getLogger().handlers) == 2
