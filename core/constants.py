"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → slide-ledger/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

# 스냅샷 포맷 버전 (로컬/클라우드 동일)
SNAPSHOT_VERSION: int = 1


class JSONBinEndpoints:
    """JSONBin API 엔드포인트 (고정값)

    공식 문서: https://jsonbin.io/api-reference
    """

    BASE_URL: str = "https://api.jsonbin.io/v3"
    BIN_NAME: str = "slide-app-data"


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # 정산 규칙
    VIG_RATE: Decimal = Decimal("0.15")  # 하우스 커미션 15%
    WEEK_LENGTH_DAYS: int = 7
    WEEK_START_HOUR_UTC: int = 12  # 다음 주 시작 시각 고정 (타임존 드리프트 방지)
    PAID_IN_FULL_NOTE: str = "Paid in full"

    # 클라우드 동기화
    SYNC_DEBOUNCE_SECONDS: float = 2.0
    SYNC_SUCCESS_RESET_SECONDS: float = 3.0
    HTTP_TIMEOUT_SECONDS: float = 10.0


class StorageKeys:
    """로컬 key/value 저장소 키"""

    APP_DATA: str = "slide_app_data"
    JSONBIN_ID: str = "slide_jsonbin_id"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SECRETS_FILE: Path = CONFIG_DIR / "secrets.yaml"

    # DB 파일 (key/value 스냅샷 저장소)
    LEDGER_DB: Path = DATA_DIR / "slide_ledger.db"
