"""
설정 로더

secrets.yaml 로드 및 클라우드 동기화/저장소 설정 생성
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from core.constants import PROJECT_ROOT, Defaults, JSONBinEndpoints, Paths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloudSecrets:
    """클라우드 백업(JSONBin) 설정

    api_key가 없으면 클라우드 동기화를 시도하지 않음
    """

    api_key: str | None = None
    base_url: str = JSONBinEndpoints.BASE_URL
    collection_id: str | None = None
    bin_id: str | None = None

    @property
    def is_configured(self) -> bool:
        """API 키 존재 여부"""
        return bool(self.api_key)


@dataclass(frozen=True)
class SyncConfig:
    """동기화 타이밍 설정"""

    debounce_seconds: float = Defaults.SYNC_DEBOUNCE_SECONDS
    success_reset_seconds: float = Defaults.SYNC_SUCCESS_RESET_SECONDS


@dataclass(frozen=True)
class Secrets:
    """보안/환경 설정 (secrets.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    cloud: CloudSecrets = field(default_factory=CloudSecrets)
    sync: SyncConfig = field(default_factory=SyncConfig)
    db_path: Path = Paths.LEDGER_DB


class SecretsLoadError(Exception):
    """Secrets 로드 실패 예외"""

    pass


def _parse_positive_float(section: dict[str, Any], key: str, default: float) -> float:
    """양수 float 설정값 파싱"""
    raw = section.get(key)
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise SecretsLoadError(f"secrets.yaml의 '{key}' 값이 숫자가 아닙니다: {raw!r}") from e
    if value < 0:
        raise SecretsLoadError(f"secrets.yaml의 '{key}' 값은 0 이상이어야 합니다: {value}")
    return value


def load_secrets(path: Path | None = None) -> Secrets:
    """secrets.yaml 파일 로드

    Args:
        path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Secrets 인스턴스

    Raises:
        SecretsLoadError: 파일이 없거나 형식이 잘못된 경우
    """
    if path is None:
        path = Paths.SECRETS_FILE

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

    jsonbin_config = data.get("jsonbin") or {}
    sync_config = data.get("sync") or {}
    storage_config = data.get("storage") or {}

    cloud = CloudSecrets(
        api_key=jsonbin_config.get("api_key") or None,
        base_url=jsonbin_config.get("base_url") or JSONBinEndpoints.BASE_URL,
        collection_id=jsonbin_config.get("collection_id") or None,
        bin_id=jsonbin_config.get("bin_id") or None,
    )

    sync = SyncConfig(
        debounce_seconds=_parse_positive_float(
            sync_config, "debounce_seconds", Defaults.SYNC_DEBOUNCE_SECONDS
        ),
        success_reset_seconds=_parse_positive_float(
            sync_config, "success_reset_seconds", Defaults.SYNC_SUCCESS_RESET_SECONDS
        ),
    )

    # 상대 경로는 프로젝트 루트 기준
    db_path_raw = storage_config.get("db_path")
    if db_path_raw:
        db_path = Path(db_path_raw)
        if not db_path.is_absolute():
            db_path = PROJECT_ROOT / db_path
    else:
        db_path = Paths.LEDGER_DB

    return Secrets(cloud=cloud, sync=sync, db_path=db_path)


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    secrets.yaml을 로드하고 관련 설정을 제공.
    파일이 없으면 기본값으로 동작 (클라우드 동기화 비활성화).
    """

    _instance: "Settings | None" = None
    _secrets: Secrets | None = None

    def __new__(cls, secrets_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, secrets_path: Path | None = None) -> None:
        if self._secrets is None:
            path = secrets_path or Paths.SECRETS_FILE
            if path.exists():
                self._secrets = load_secrets(path)
            else:
                logger.info(f"secrets.yaml 없음, 기본 설정 사용 (클라우드 동기화 비활성화): {path}")
                self._secrets = Secrets()

    @property
    def cloud(self) -> CloudSecrets:
        """클라우드 백업 설정"""
        assert self._secrets is not None
        return self._secrets.cloud

    @property
    def sync(self) -> SyncConfig:
        """동기화 타이밍 설정"""
        assert self._secrets is not None
        return self._secrets.sync

    @property
    def db_path(self) -> Path:
        """로컬 스냅샷 DB 경로"""
        assert self._secrets is not None
        return self._secrets.db_path

    @property
    def cloud_enabled(self) -> bool:
        """클라우드 동기화 사용 여부"""
        return self.cloud.is_configured

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._secrets = None


def get_settings(secrets_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        secrets_path: secrets.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(secrets_path)
