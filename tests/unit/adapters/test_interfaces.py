"""
Protocol 인터페이스 테스트

Protocol 타입 검증 및 구현 확인.
"""

from pathlib import Path

from adapters.interfaces import IClock, IIdGenerator, IKeyValueStore, IRemoteDocumentService
from adapters.jsonbin.client import JSONBinClient
from adapters.mock.memory_store import MemoryKeyValueStore
from adapters.mock.remote_document import MockRemoteDocumentService
from adapters.storage.sqlite_kv import SQLiteKeyValueStore
from core.utils.ids import UuidGenerator
from core.utils.timezone import SystemClock


class TestIKeyValueStore:
    """IKeyValueStore Protocol 테스트"""

    def test_memory_store_implements_protocol(self) -> None:
        assert isinstance(MemoryKeyValueStore(), IKeyValueStore)

    def test_sqlite_store_implements_protocol(self, temp_dir: Path) -> None:
        store = SQLiteKeyValueStore(temp_dir / "kv.db")
        try:
            assert isinstance(store, IKeyValueStore)
        finally:
            store.close()


class TestIRemoteDocumentService:
    """IRemoteDocumentService Protocol 테스트"""

    def test_mock_implements_protocol(self) -> None:
        assert isinstance(MockRemoteDocumentService(), IRemoteDocumentService)

    def test_jsonbin_client_implements_protocol(self) -> None:
        client = JSONBinClient(api_key="key", kv=MemoryKeyValueStore())

        assert isinstance(client, IRemoteDocumentService)

    def test_protocol_has_required_methods(self) -> None:
        client = JSONBinClient(api_key="key", kv=MemoryKeyValueStore())

        for method_name in ("create", "read", "update"):
            assert callable(getattr(client, method_name)), f"Missing method: {method_name}"


class TestIdAndClock:
    """IIdGenerator / IClock Protocol 테스트"""

    def test_uuid_generator(self) -> None:
        generator = UuidGenerator()

        assert isinstance(generator, IIdGenerator)
        assert generator.new_id() != generator.new_id()

    def test_system_clock(self) -> None:
        clock = SystemClock()

        assert isinstance(clock, IClock)
        assert clock.now().endswith("Z")
