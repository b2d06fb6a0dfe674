"""
core/constants.py 테스트

모든 경로가 pathlib.Path 타입이고, 상수가 정상적으로 접근 가능한지 확인
"""

from decimal import Decimal
from pathlib import Path

from core.constants import (
    PROJECT_ROOT,
    SNAPSHOT_VERSION,
    Defaults,
    JSONBinEndpoints,
    Paths,
    StorageKeys,
)


class TestProjectRoot:
    """PROJECT_ROOT 테스트"""

    def test_project_root_is_path(self) -> None:
        """PROJECT_ROOT가 Path 타입인지 확인"""
        assert isinstance(PROJECT_ROOT, Path)

    def test_project_root_is_absolute(self) -> None:
        assert PROJECT_ROOT.is_absolute()

    def test_project_root_contains_core_directory(self) -> None:
        """PROJECT_ROOT에 core 디렉토리가 있는지 확인"""
        assert (PROJECT_ROOT / "core").exists()


class TestJSONBinEndpoints:
    """JSONBinEndpoints 테스트"""

    def test_base_url(self) -> None:
        assert JSONBinEndpoints.BASE_URL == "https://api.jsonbin.io/v3"

    def test_bin_name(self) -> None:
        assert JSONBinEndpoints.BIN_NAME == "slide-app-data"


class TestDefaults:
    """Defaults 테스트"""

    def test_vig_rate_is_decimal(self) -> None:
        """금액 계산 상수는 Decimal"""
        assert Defaults.VIG_RATE == Decimal("0.15")
        assert isinstance(Defaults.VIG_RATE, Decimal)

    def test_sync_timing(self) -> None:
        assert Defaults.SYNC_DEBOUNCE_SECONDS == 2.0
        assert Defaults.SYNC_SUCCESS_RESET_SECONDS == 3.0

    def test_week_rules(self) -> None:
        assert Defaults.WEEK_LENGTH_DAYS == 7
        assert Defaults.WEEK_START_HOUR_UTC == 12
        assert Defaults.PAID_IN_FULL_NOTE == "Paid in full"


class TestStorageKeys:
    """StorageKeys 테스트"""

    def test_keys(self) -> None:
        assert StorageKeys.APP_DATA == "slide_app_data"
        assert StorageKeys.JSONBIN_ID == "slide_jsonbin_id"


class TestPaths:
    """Paths 테스트"""

    def test_all_paths_are_path_type(self) -> None:
        """모든 경로가 Path 타입인지 확인"""
        for value in (
            Paths.CONFIG_DIR,
            Paths.DATA_DIR,
            Paths.LOGS_DIR,
            Paths.SECRETS_FILE,
            Paths.LEDGER_DB,
        ):
            assert isinstance(value, Path)

    def test_paths_under_project_root(self) -> None:
        assert Paths.SECRETS_FILE.parent == Paths.CONFIG_DIR
        assert Paths.LEDGER_DB.parent == Paths.DATA_DIR
        assert Paths.DATA_DIR.parent == PROJECT_ROOT

    def test_db_extension(self) -> None:
        assert Paths.LEDGER_DB.suffix == ".db"


class TestSnapshotVersion:
    def test_version(self) -> None:
        assert SNAPSHOT_VERSION == 1
