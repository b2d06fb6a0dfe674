"""
Mock 어댑터 테스트

MockRemoteDocumentService / MemoryKeyValueStore 동작 확인
"""

import pytest

from adapters.mock.memory_store import MemoryKeyValueStore
from adapters.mock.remote_document import MockRemoteDocumentService
from adapters.models import NO_DOCUMENT_ID_ERROR, NOT_CONFIGURED_ERROR


class TestMockRemoteDocumentService:
    """MockRemoteDocumentService 테스트"""

    @pytest.mark.asyncio
    async def test_read_before_create(self) -> None:
        remote = MockRemoteDocumentService()

        result = await remote.read()

        assert result.error == NO_DOCUMENT_ID_ERROR
        assert [c.method for c in remote.calls] == ["read"]

    @pytest.mark.asyncio
    async def test_update_without_document_creates(self) -> None:
        remote = MockRemoteDocumentService()

        result = await remote.update({"n": 1})

        assert result.document_id == "mock-bin"
        assert [c.method for c in remote.calls] == ["create"]
        assert remote.update_count == 1

    @pytest.mark.asyncio
    async def test_stored_document_is_copied(self) -> None:
        """호출자 dict 변경이 원격 문서에 영향 없음"""
        remote = MockRemoteDocumentService()
        data = {"weeks": []}

        await remote.create(data)
        data["weeks"].append("mutated")
        result = await remote.read()

        assert result.data == {"weeks": []}

    @pytest.mark.asyncio
    async def test_initial_document(self) -> None:
        remote = MockRemoteDocumentService(document={"v": 1})

        result = await remote.read()

        assert result.document_id == "mock-bin"
        assert result.data == {"v": 1}

    @pytest.mark.asyncio
    async def test_should_fail(self) -> None:
        remote = MockRemoteDocumentService(should_fail=True, error="503", document={})

        assert (await remote.update({})).error == "503"
        assert (await remote.read()).error == "503"

    @pytest.mark.asyncio
    async def test_not_configured(self) -> None:
        remote = MockRemoteDocumentService(configured=False)

        assert not remote.is_configured
        assert (await remote.create({})).error == NOT_CONFIGURED_ERROR


class TestMemoryKeyValueStore:
    """MemoryKeyValueStore 테스트"""

    def test_write_count(self) -> None:
        kv = MemoryKeyValueStore()

        kv.set("a", "1")
        kv.set("a", "2")
        kv.remove("a")
        kv.remove("missing")

        assert kv.write_count == 2
        assert kv.get("a") is None

    def test_initial_data_copied(self) -> None:
        initial = {"a": "1"}
        kv = MemoryKeyValueStore(initial)
        kv.set("b", "2")

        assert initial == {"a": "1"}
        assert kv.get("a") == "1"
