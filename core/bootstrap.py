"""
Ledger Bootstrap

설정 로드 + 어댑터 생성 + LedgerStore 의존성 주입.
Web 서버와 백업 스크립트가 같은 조립 경로를 사용.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from adapters.jsonbin.client import JSONBinClient
from adapters.storage.sqlite_kv import SQLiteKeyValueStore
from core.config.loader import Settings, get_settings
from core.ledger.store import LedgerStore
from core.sync.cloud_sync import CloudSync

logger = logging.getLogger(__name__)


@dataclass
class LedgerRuntime:
    """조립된 구성요소 묶음 (종료 시 함께 정리)"""

    store: LedgerStore
    kv: SQLiteKeyValueStore
    cloud: CloudSync
    remote: JSONBinClient

    async def aclose(self) -> None:
        """대기 중인 push 완료 후 연결 종료"""
        await self.cloud.wait()
        self.cloud.close()
        await self.remote.close()
        self.kv.close()


def build_runtime(
    settings: Settings | None = None,
    db_path: Path | None = None,
) -> LedgerRuntime:
    """설정으로부터 LedgerStore 조립 및 초기화

    Args:
        settings: 설정 (None이면 get_settings())
        db_path: DB 경로 오버라이드 (테스트/스크립트용)

    Returns:
        init()까지 마친 LedgerRuntime
    """
    settings = settings or get_settings()

    kv = SQLiteKeyValueStore(db_path or settings.db_path)
    remote = JSONBinClient(
        api_key=settings.cloud.api_key,
        kv=kv,
        base_url=settings.cloud.base_url,
        collection_id=settings.cloud.collection_id,
        bin_id=settings.cloud.bin_id,
    )
    cloud = CloudSync(
        remote,
        debounce_seconds=settings.sync.debounce_seconds,
        success_reset_seconds=settings.sync.success_reset_seconds,
    )

    store = LedgerStore(kv, cloud=cloud)
    store.init()

    logger.info(
        f"LedgerStore 초기화: 주간 {store.week_count}개, 플레이어 {store.player_count}명, "
        f"클라우드 동기화={'on' if cloud.enabled else 'off'}"
    )
    return LedgerRuntime(store=store, kv=kv, cloud=cloud, remote=remote)
