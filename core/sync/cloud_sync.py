"""
클라우드 동기화 코디네이터

원격 문서 서비스로의 스냅샷 미러링 (last-writer-wins).

- push: 변경마다 debounce 예약, 연속 변경은 한 번의 원격 쓰기로 합침
- force_push: 대기 중 예약 취소 후 즉시 쓰기
- pull: 원격 스냅샷으로 로컬 상태 전체 교체 (병합 없음)
- 상태: idle → syncing → success/error, success는 잠시 후 idle로 복귀
- 재시도 없음, 실패는 에러 문자열로 노출하고 로컬 상태를 그대로 유지
"""

import logging
from typing import Any, Callable

from adapters.interfaces import IRemoteDocumentService
from adapters.models import NOT_CONFIGURED_ERROR, RemoteResult
from core.constants import Defaults
from core.types import SyncState
from core.utils.debounce import Debouncer
from core.utils.timezone import now_iso

logger = logging.getLogger(__name__)

SyncListener = Callable[[SyncState], None]

# pull 데이터 형식 오류 시 에러 문자열
INVALID_REMOTE_DATA_ERROR = "Invalid cloud data"


class CloudSync:
    """클라우드 동기화 관리

    Args:
        remote: 원격 문서 서비스
        debounce_seconds: 변경 후 원격 쓰기까지 대기 시간
        success_reset_seconds: success 상태가 idle로 돌아가기까지 시간

    사용 예시:
    ```python
    sync = CloudSync(JSONBinClient(...))
    sync.subscribe(lambda state: print(state))

    sync.schedule_push(store.to_snapshot)   # debounce
    result = await sync.force_push(store.to_snapshot())
    ```
    """

    def __init__(
        self,
        remote: IRemoteDocumentService,
        debounce_seconds: float = Defaults.SYNC_DEBOUNCE_SECONDS,
        success_reset_seconds: float = Defaults.SYNC_SUCCESS_RESET_SECONDS,
    ):
        self.remote = remote
        self._push_timer = Debouncer(debounce_seconds, name="cloud-push")
        self._reset_timer = Debouncer(success_reset_seconds, name="sync-status-reset")

        self._state = SyncState.IDLE
        self._last_error: str | None = None
        self._last_synced: str | None = None
        self._listeners: list[SyncListener] = []

    # -------------------------------------------------------------------------
    # 상태
    # -------------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        """원격 자격 증명 설정 여부"""
        return self.remote.is_configured

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def last_synced(self) -> str | None:
        return self._last_synced

    @property
    def has_pending_push(self) -> bool:
        return self._push_timer.pending

    def subscribe(self, listener: SyncListener) -> Callable[[], None]:
        """상태 변경 구독

        Returns:
            구독 해제 함수
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SyncState, error: str | None = None) -> None:
        self._state = state
        self._last_error = error
        for listener in list(self._listeners):
            listener(state)

        if state == SyncState.SUCCESS:
            self._reset_timer.schedule(self._reset_to_idle)
        else:
            self._reset_timer.cancel()

    async def _reset_to_idle(self) -> None:
        if self._state == SyncState.SUCCESS:
            self._set_state(SyncState.IDLE)

    # -------------------------------------------------------------------------
    # push
    # -------------------------------------------------------------------------

    def schedule_push(self, snapshot_provider: Callable[[], dict[str, Any]]) -> bool:
        """debounce 원격 쓰기 예약

        스냅샷은 실제 쓰기 시점에 provider로부터 가져옴 (최신 상태 반영).

        Returns:
            예약 여부 (미설정 또는 이벤트 루프 없음이면 False)
        """
        if not self.enabled:
            return False

        async def _push_latest() -> None:
            await self.push(snapshot_provider())

        return self._push_timer.schedule(_push_latest)

    def cancel_pending(self) -> bool:
        """대기 중인 push 예약 취소"""
        return self._push_timer.cancel()

    async def push(self, snapshot: dict[str, Any]) -> RemoteResult:
        """원격 문서에 스냅샷 쓰기"""
        if not self.enabled:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)

        self._set_state(SyncState.SYNCING)
        result = await self.remote.update(snapshot)

        if result.success:
            self._last_synced = now_iso()
            self._set_state(SyncState.SUCCESS)
            logger.info("클라우드 동기화 완료 (push)")
        else:
            self._set_state(SyncState.ERROR, result.error)
            logger.error(f"클라우드 동기화 실패 (push): {result.error}")

        return result

    async def force_push(self, snapshot: dict[str, Any]) -> RemoteResult:
        """대기 중 예약 취소 후 즉시 쓰기"""
        self.cancel_pending()
        return await self.push(snapshot)

    # -------------------------------------------------------------------------
    # pull
    # -------------------------------------------------------------------------

    async def pull(self, apply: Callable[[dict[str, Any]], bool]) -> RemoteResult:
        """원격 스냅샷 조회 후 apply 콜백으로 로컬 상태 교체

        Args:
            apply: 스냅샷을 적용하고 성공 여부를 반환하는 함수

        Returns:
            원격 조회 결과 (적용 실패 시 success=False)
        """
        if not self.enabled:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)

        self._set_state(SyncState.SYNCING)
        result = await self.remote.read()

        if result.is_not_synced_yet:
            # 아직 원격 문서 없음 - 오류 아님
            logger.info("클라우드 문서 없음 (첫 동기화 전)")
            self._set_state(SyncState.IDLE)
            return result

        if not result.success or result.data is None:
            error = result.error or INVALID_REMOTE_DATA_ERROR
            self._set_state(SyncState.ERROR, error)
            logger.error(f"클라우드 동기화 실패 (pull): {error}")
            return RemoteResult.fail(error)

        if not apply(result.data):
            self._set_state(SyncState.ERROR, INVALID_REMOTE_DATA_ERROR)
            return RemoteResult.fail(INVALID_REMOTE_DATA_ERROR)

        self._last_synced = now_iso()
        self._set_state(SyncState.SUCCESS)
        logger.info("클라우드 동기화 완료 (pull)")
        return result

    async def wait(self) -> None:
        """대기 중인 push가 끝날 때까지 대기 (종료/테스트용)"""
        await self._push_timer.wait()

    def close(self) -> None:
        """타이머 정리"""
        self._push_timer.cancel()
        self._reset_timer.cancel()
