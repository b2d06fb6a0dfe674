"""
core/sync/cloud_sync.py 테스트

debounce push, force push, pull, 상태 전이 (idle → syncing → success/error → idle)
"""

import asyncio

import pytest

from adapters.mock.memory_store import MemoryKeyValueStore
from adapters.mock.remote_document import MockRemoteDocumentService
from adapters.models import NO_DOCUMENT_ID_ERROR, NOT_CONFIGURED_ERROR
from core.ledger.store import LedgerStore
from core.sync.cloud_sync import INVALID_REMOTE_DATA_ERROR, CloudSync
from core.types import SyncState


def make_sync(remote: MockRemoteDocumentService, reset: float = 0.05) -> CloudSync:
    return CloudSync(remote, debounce_seconds=0.01, success_reset_seconds=reset)


class TestPush:
    """원격 쓰기"""

    @pytest.mark.asyncio
    async def test_force_push_success(self, remote: MockRemoteDocumentService) -> None:
        sync = make_sync(remote)
        states: list[SyncState] = []
        sync.subscribe(states.append)

        result = await sync.force_push({"weeks": []})

        assert result.success
        assert remote.document == {"weeks": []}
        assert states == [SyncState.SYNCING, SyncState.SUCCESS]
        assert sync.last_synced is not None
        sync.close()

    @pytest.mark.asyncio
    async def test_first_push_creates_document(self, remote: MockRemoteDocumentService) -> None:
        sync = make_sync(remote)

        await sync.force_push({"v": 1})
        await sync.force_push({"v": 2})

        assert [c.method for c in remote.calls] == ["create", "update"]
        assert remote.document == {"v": 2}
        sync.close()

    @pytest.mark.asyncio
    async def test_failure_sets_error(self) -> None:
        remote = MockRemoteDocumentService(should_fail=True, error="boom", document={})
        sync = make_sync(remote)

        result = await sync.force_push({"weeks": []})

        assert not result.success
        assert sync.state == SyncState.ERROR
        assert sync.last_error == "boom"

    @pytest.mark.asyncio
    async def test_not_configured(self) -> None:
        sync = make_sync(MockRemoteDocumentService(configured=False))

        result = await sync.force_push({})

        assert result.error == NOT_CONFIGURED_ERROR
        assert sync.state == SyncState.IDLE
        assert sync.schedule_push(dict) is False

    @pytest.mark.asyncio
    async def test_success_resets_to_idle(self, remote: MockRemoteDocumentService) -> None:
        sync = make_sync(remote, reset=0.01)

        await sync.force_push({})
        assert sync.state == SyncState.SUCCESS

        await asyncio.sleep(0.05)
        assert sync.state == SyncState.IDLE

    @pytest.mark.asyncio
    async def test_unsubscribe(self, remote: MockRemoteDocumentService) -> None:
        sync = make_sync(remote)
        states: list[SyncState] = []
        unsubscribe = sync.subscribe(states.append)
        unsubscribe()

        await sync.force_push({})

        assert states == []
        sync.close()


class TestDebouncedPush:
    """변경 연속 발생 시 한 번만 쓰기"""

    @pytest.mark.asyncio
    async def test_burst_coalesced_with_latest_snapshot(self, remote: MockRemoteDocumentService) -> None:
        sync = make_sync(remote)
        snapshot = {"n": 0}

        for n in range(1, 4):
            snapshot = {"n": n}
            assert sync.schedule_push(lambda: snapshot)

        await sync.wait()

        assert remote.update_count == 1
        assert remote.document == {"n": 3}
        sync.close()

    @pytest.mark.asyncio
    async def test_force_push_cancels_pending(self, remote: MockRemoteDocumentService) -> None:
        sync = make_sync(remote)
        sync.schedule_push(lambda: {"from": "timer"})

        await sync.force_push({"from": "force"})
        await asyncio.sleep(0.03)

        assert remote.update_count == 1
        assert remote.document == {"from": "force"}
        assert not sync.has_pending_push
        sync.close()

    def test_schedule_without_loop(self, remote: MockRemoteDocumentService) -> None:
        sync = make_sync(remote)

        assert sync.schedule_push(dict) is False


class TestPull:
    """원격 조회 후 적용"""

    @pytest.mark.asyncio
    async def test_not_synced_yet_is_not_error(self, remote: MockRemoteDocumentService) -> None:
        sync = make_sync(remote)

        result = await sync.pull(lambda data: True)

        assert result.error == NO_DOCUMENT_ID_ERROR
        assert sync.state == SyncState.IDLE

    @pytest.mark.asyncio
    async def test_apply_success(self) -> None:
        remote = MockRemoteDocumentService(document={"weeks": []})
        sync = make_sync(remote)
        applied: list[dict] = []

        def apply(data: dict) -> bool:
            applied.append(data)
            return True

        result = await sync.pull(apply)

        assert result.success
        assert applied == [{"weeks": []}]
        assert sync.state == SyncState.SUCCESS
        sync.close()

    @pytest.mark.asyncio
    async def test_apply_rejects_data(self) -> None:
        sync = make_sync(MockRemoteDocumentService(document={"bad": True}))

        result = await sync.pull(lambda data: False)

        assert not result.success
        assert result.error == INVALID_REMOTE_DATA_ERROR
        assert sync.state == SyncState.ERROR

    @pytest.mark.asyncio
    async def test_remote_failure(self) -> None:
        sync = make_sync(MockRemoteDocumentService(should_fail=True, error="503", document={}))

        result = await sync.pull(lambda data: True)

        assert result.error == "503"
        assert sync.state == SyncState.ERROR


class TestStoreIntegration:
    """LedgerStore 변경 → 클라우드 push, pull → 로컬 교체"""

    @pytest.mark.asyncio
    async def test_mutations_push_once(self, make_store, remote: MockRemoteDocumentService) -> None:
        sync = make_sync(remote)
        store: LedgerStore = make_store(cloud=sync)

        store.add_player("Alice", 7)
        store.add_player("Bob", 8)
        store.create_week("Week 1")
        await sync.wait()

        assert remote.update_count == 1
        assert len(remote.document["players"]) == 2
        assert len(remote.document["weeks"]) == 1
        sync.close()

    @pytest.mark.asyncio
    async def test_sync_from_cloud_replaces_state(self, make_store) -> None:
        source = LedgerStore(MemoryKeyValueStore())
        source.add_player("Remote", 42)
        remote = MockRemoteDocumentService(document=source.to_snapshot())
        sync = make_sync(remote)
        store: LedgerStore = make_store(cloud=sync)
        store.add_player("Local", 1)
        sync.cancel_pending()
        calls_before = remote.update_count

        result = await store.sync_from_cloud()
        await sync.wait()

        assert result.success
        assert [p.account_number for p in store.players] == [42]
        assert remote.update_count == calls_before
        sync.close()

    @pytest.mark.asyncio
    async def test_sync_from_cloud_invalid_keeps_state(self, make_store) -> None:
        remote = MockRemoteDocumentService(document={"weeks": "nope"})
        sync = make_sync(remote)
        store: LedgerStore = make_store(cloud=sync)
        store.add_player("Local", 1)
        sync.cancel_pending()

        result = await store.sync_from_cloud()

        assert not result.success
        assert [p.account_number for p in store.players] == [1]
        assert sync.state == SyncState.ERROR

    @pytest.mark.asyncio
    async def test_local_only_store(self, store: LedgerStore) -> None:
        result = await store.force_sync_to_cloud()

        assert result.error == NOT_CONFIGURED_ERROR
        assert (await store.sync_from_cloud()).error == NOT_CONFIGURED_ERROR
