"""
로컬 저장소 어댑터
"""

from adapters.storage.sqlite_kv import SQLiteKeyValueStore

__all__ = [
    "SQLiteKeyValueStore",
]
