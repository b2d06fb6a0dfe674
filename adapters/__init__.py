"""
어댑터 레이어

외부 서비스(로컬 저장소, 클라우드 백업)와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import (
    IClock,
    IIdGenerator,
    IKeyValueStore,
    IRemoteDocumentService,
)
from adapters.models import (
    NO_DOCUMENT_ID_ERROR,
    NOT_CONFIGURED_ERROR,
    RemoteResult,
)

__all__ = [
    # Interfaces
    "IKeyValueStore",
    "IRemoteDocumentService",
    "IIdGenerator",
    "IClock",
    # Models
    "RemoteResult",
    "NO_DOCUMENT_ID_ERROR",
    "NOT_CONFIGURED_ERROR",
]
