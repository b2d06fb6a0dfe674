"""
Mock 원격 문서 서비스

테스트용 인메모리 IRemoteDocumentService 구현.
"""

import copy
from dataclasses import dataclass
from typing import Any

from adapters.models import NO_DOCUMENT_ID_ERROR, NOT_CONFIGURED_ERROR, RemoteResult


@dataclass
class RemoteCall:
    """호출 기록"""

    method: str
    data: dict[str, Any] | None


class MockRemoteDocumentService:
    """Mock 원격 문서 서비스

    IRemoteDocumentService Protocol 구현.
    모든 호출을 기록하여 테스트에서 검증 가능.

    사용 예시:
    ```python
    remote = MockRemoteDocumentService()
    sync = CloudSync(remote, debounce_seconds=0.01)

    await sync.force_push({"weeks": []})

    assert remote.update_count == 1
    assert remote.document == {"weeks": []}
    ```
    """

    def __init__(
        self,
        configured: bool = True,
        should_fail: bool = False,
        error: str = "Network error",
        document: dict[str, Any] | None = None,
        document_id: str | None = None,
    ):
        """
        Args:
            configured: False면 is_configured=False (자격 증명 없음)
            should_fail: True면 모든 호출 실패 (에러 시나리오 테스트용)
            error: 실패 시 에러 문자열
            document: 초기 원격 문서
            document_id: 초기 문서 ID (document가 있으면 기본값 "mock-bin")
        """
        self.configured = configured
        self.should_fail = should_fail
        self.error = error
        self.document = copy.deepcopy(document)
        self.document_id = document_id or ("mock-bin" if document is not None else None)
        self.calls: list[RemoteCall] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    @property
    def update_count(self) -> int:
        return sum(1 for c in self.calls if c.method in ("create", "update"))

    async def create(self, data: dict[str, Any]) -> RemoteResult:
        self.calls.append(RemoteCall("create", data))
        if not self.configured:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)
        if self.should_fail:
            return RemoteResult.fail(self.error)

        self.document_id = "mock-bin"
        self.document = copy.deepcopy(data)
        return RemoteResult.ok(document_id=self.document_id)

    async def read(self) -> RemoteResult:
        self.calls.append(RemoteCall("read", None))
        if not self.configured:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)
        if self.document_id is None:
            return RemoteResult.fail(NO_DOCUMENT_ID_ERROR)
        if self.should_fail:
            return RemoteResult.fail(self.error)
        return RemoteResult.ok(document_id=self.document_id, data=copy.deepcopy(self.document))

    async def update(self, data: dict[str, Any]) -> RemoteResult:
        if self.document_id is None:
            return await self.create(data)

        self.calls.append(RemoteCall("update", data))
        if not self.configured:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)
        if self.should_fail:
            return RemoteResult.fail(self.error)

        self.document = copy.deepcopy(data)
        return RemoteResult.ok(document_id=self.document_id)
