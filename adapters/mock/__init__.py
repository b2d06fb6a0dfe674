"""
Mock 어댑터

테스트용 Mock 구현체 제공.
Protocol 준수하여 실제 구현체와 교체 가능.
"""

from adapters.mock.memory_store import MemoryKeyValueStore
from adapters.mock.remote_document import MockRemoteDocumentService, RemoteCall

__all__ = [
    "MemoryKeyValueStore",
    "MockRemoteDocumentService",
    "RemoteCall",
]
