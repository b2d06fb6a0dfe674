"""
클라우드 동기화

로컬 스냅샷을 원격 문서 서비스로 미러링 (debounce, last-writer-wins).
"""

from core.sync.cloud_sync import INVALID_REMOTE_DATA_ERROR, CloudSync

__all__ = [
    "CloudSync",
    "INVALID_REMOTE_DATA_ERROR",
]
