"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Any, Protocol, runtime_checkable

from adapters.models import RemoteResult


@runtime_checkable
class IKeyValueStore(Protocol):
    """로컬 key/value 저장소 인터페이스

    스냅샷 JSON 문자열과 원격 문서 ID 캐시 저장에 사용.
    모든 호출은 동기이며 즉시 반영.
    """

    def get(self, key: str) -> str | None:
        """값 조회

        Returns:
            저장된 문자열 또는 None (키 없음)
        """
        ...

    def set(self, key: str, value: str) -> None:
        """값 저장 (덮어쓰기)"""
        ...

    def remove(self, key: str) -> None:
        """값 삭제 (없으면 무시)"""
        ...


@runtime_checkable
class IRemoteDocumentService(Protocol):
    """원격 문서 저장소 인터페이스 (클라우드 백업)

    실패는 예외 대신 RemoteResult(success=False, error=...)로 반환.
    """

    @property
    def is_configured(self) -> bool:
        """자격 증명 설정 여부 (False면 동기화 시도 안 함)"""
        ...

    async def create(self, data: dict[str, Any]) -> RemoteResult:
        """새 문서 생성

        Returns:
            성공 시 document_id 포함
        """
        ...

    async def read(self) -> RemoteResult:
        """저장된 문서 ID로 조회

        문서 ID가 없으면 error=NO_DOCUMENT_ID_ERROR (아직 동기화 전, 치명적 아님).
        """
        ...

    async def update(self, data: dict[str, Any]) -> RemoteResult:
        """문서 갱신 (문서 ID가 없으면 생성)"""
        ...


@runtime_checkable
class IIdGenerator(Protocol):
    """전역 고유 ID 생성기"""

    def new_id(self) -> str:
        ...


@runtime_checkable
class IClock(Protocol):
    """시계 - 정렬 가능한 문자열 타임스탬프 반환"""

    def now(self) -> str:
        ...
