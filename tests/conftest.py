"""
pytest 공통 fixture 정의

임시 디렉토리, 설정 파일, 고정 시계/ID 생성기, 인메모리 저장소, LedgerStore 팩토리
"""

import tempfile
from pathlib import Path
from typing import Callable

import pytest

from adapters.mock.memory_store import MemoryKeyValueStore
from adapters.mock.remote_document import MockRemoteDocumentService
from core.ledger.store import LedgerStore
from core.sync.cloud_sync import CloudSync

FIXED_NOW = "2026-03-02T12:00:00.000Z"


class FixedClock:
    """고정 시각을 반환하는 테스트용 시계 (IClock)"""

    def __init__(self, value: str = FIXED_NOW):
        self.value = value

    def now(self) -> str:
        return self.value


class SequentialIds:
    """id-1, id-2, ... 순서로 발급하는 테스트용 ID 생성기 (IIdGenerator)"""

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.count = 0

    def new_id(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    secrets_content = """# 테스트용 secrets.yaml
jsonbin:
  api_key: "test_master_key"
  base_url: "https://jsonbin.example.com/v3/"
  collection_id: "collection-1"
  bin_id: null

sync:
  debounce_seconds: 0.5
  success_reset_seconds: 1

storage:
  db_path: data/test_ledger.db
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def make_store(kv: MemoryKeyValueStore, ids: SequentialIds, clock: FixedClock) -> Callable[..., LedgerStore]:
    """LedgerStore 팩토리 (cloud 미지정 시 로컬 전용)"""

    def _make(cloud: CloudSync | None = None, init: bool = True) -> LedgerStore:
        store = LedgerStore(kv, cloud=cloud, ids=ids, clock=clock)
        if init:
            store.init()
        return store

    return _make


@pytest.fixture
def store(make_store: Callable[..., LedgerStore]) -> LedgerStore:
    return make_store()


@pytest.fixture
def remote() -> MockRemoteDocumentService:
    return MockRemoteDocumentService()
