"""
JSONBin 어댑터

JSONBin v3 API 기반 원격 문서 저장소 (클라우드 백업).
"""

from adapters.jsonbin.client import JSONBinClient

__all__ = [
    "JSONBinClient",
]
