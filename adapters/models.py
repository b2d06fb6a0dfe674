"""
어댑터 공통 데이터 모델

외부 서비스 호출 결과를 표현하는 타입.
"""

from dataclasses import dataclass
from typing import Any


# 원격 문서 ID가 아직 없을 때의 오류 문자열 (치명적 오류 아님)
NO_DOCUMENT_ID_ERROR = "No bin ID stored"

# 자격 증명 미설정 오류 문자열
NOT_CONFIGURED_ERROR = "API key not configured"


@dataclass(frozen=True)
class RemoteResult:
    """원격 문서 서비스 호출 결과

    Attributes:
        success: 성공 여부
        document_id: 생성된/사용한 문서 ID
        data: 조회된 문서 본문 (read)
        error: 실패 사유
    """

    success: bool
    document_id: str | None = None
    data: dict[str, Any] | None = None
    error: str | None = None

    @property
    def is_not_synced_yet(self) -> bool:
        """문서 ID가 없어 실패한 경우 (첫 동기화 전)"""
        return not self.success and self.error == NO_DOCUMENT_ID_ERROR

    @classmethod
    def ok(
        cls,
        document_id: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> "RemoteResult":
        return cls(success=True, document_id=document_id, data=data)

    @classmethod
    def fail(cls, error: str) -> "RemoteResult":
        return cls(success=False, error=error)
