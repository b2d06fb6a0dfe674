"""
JSONBin v3 API 클라이언트

단일 private bin에 앱 스냅샷 전체를 저장 (last-writer-wins).
IRemoteDocumentService Protocol 준수.

- POST /b: bin 생성, 응답 metadata.id를 로컬에 캐시
- GET /b/{id}: 응답 record가 스냅샷
- PUT /b/{id}: 스냅샷 덮어쓰기 (bin이 없으면 생성)
"""

import logging
from typing import Any

import httpx

from adapters.interfaces import IKeyValueStore
from adapters.models import NO_DOCUMENT_ID_ERROR, NOT_CONFIGURED_ERROR, RemoteResult
from core.constants import Defaults, JSONBinEndpoints, StorageKeys

logger = logging.getLogger(__name__)


class JSONBinClient:
    """JSONBin REST 클라이언트

    설정된 고정 bin_id가 있으면 그것을 사용하고,
    없으면 key/value 저장소에 캐시된 bin ID를 사용.

    Args:
        api_key: X-Master-Key (없으면 모든 호출이 실패 결과 반환)
        kv: bin ID 캐시용 key/value 저장소
        base_url: API 베이스 URL
        collection_id: bin 생성 시 지정할 컬렉션 (선택)
        bin_id: 고정 bin ID (선택)
        timeout: 요청 타임아웃 (초)
    """

    def __init__(
        self,
        api_key: str | None,
        kv: IKeyValueStore,
        base_url: str = JSONBinEndpoints.BASE_URL,
        collection_id: str | None = None,
        bin_id: str | None = None,
        timeout: float = Defaults.HTTP_TIMEOUT_SECONDS,
    ):
        self.api_key = api_key
        self.kv = kv
        self.base_url = base_url.rstrip("/")
        self.collection_id = collection_id
        self.timeout = timeout

        self._fixed_bin_id = bin_id
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "JSONBinClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # bin ID
    # -------------------------------------------------------------------------

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def bin_id(self) -> str | None:
        """현재 사용할 bin ID (고정값 우선)"""
        if self._fixed_bin_id:
            return self._fixed_bin_id
        return self.kv.get(StorageKeys.JSONBIN_ID)

    @property
    def has_bin(self) -> bool:
        return bool(self.bin_id)

    def set_bin_id(self, bin_id: str) -> None:
        """bin ID 캐시 (다음 실행에서도 같은 bin 사용)"""
        self.kv.set(StorageKeys.JSONBIN_ID, bin_id)

    def _headers(self, with_body: bool = False) -> dict[str, str]:
        headers = {"X-Master-Key": self.api_key or ""}
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    # -------------------------------------------------------------------------
    # 요청
    # -------------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        fallback_error: str,
        headers: dict[str, str],
        data: dict[str, Any] | None = None,
    ) -> tuple[dict[str, Any] | None, str | None]:
        """API 요청 실행

        Returns:
            (응답 JSON, None) 또는 (None, 에러 문자열)
        """
        client = await self._get_client()
        url = f"{self.base_url}{path}"

        try:
            response = await client.request(method, url, headers=headers, json=data)
        except httpx.TimeoutException as e:
            logger.warning(f"JSONBin 요청 타임아웃: {method} {path}")
            return None, str(e) or "Request timed out"
        except httpx.HTTPError as e:
            logger.warning(f"JSONBin 네트워크 오류: {method} {path}: {e}")
            return None, str(e) or "Network error"

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            message = body.get("message") if isinstance(body, dict) else None
            error = message or fallback_error
            logger.warning(f"JSONBin API 오류: {method} {path} status={response.status_code}, {error}")
            return None, error

        if not isinstance(body, dict):
            return None, "Invalid response body"
        return body, None

    async def create(self, data: dict[str, Any]) -> RemoteResult:
        """새 private bin 생성 후 ID 캐시"""
        if not self.is_configured:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)

        headers = self._headers(with_body=True)
        headers["X-Bin-Name"] = JSONBinEndpoints.BIN_NAME
        headers["X-Bin-Private"] = "true"
        if self.collection_id:
            headers["X-Collection-Id"] = self.collection_id

        body, error = await self._request("POST", "/b", "Failed to create bin", headers, data)
        if error is not None:
            return RemoteResult.fail(error)

        try:
            bin_id = str(body["metadata"]["id"])
        except (KeyError, TypeError):
            return RemoteResult.fail("Invalid response body")

        self.set_bin_id(bin_id)
        logger.info(f"JSONBin bin 생성: {bin_id}")
        return RemoteResult.ok(document_id=bin_id)

    async def read(self) -> RemoteResult:
        """bin의 최신 record 조회"""
        if not self.is_configured:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)

        bin_id = self.bin_id
        if not bin_id:
            return RemoteResult.fail(NO_DOCUMENT_ID_ERROR)

        body, error = await self._request("GET", f"/b/{bin_id}", "Failed to read bin", self._headers())
        if error is not None:
            return RemoteResult.fail(error)

        record = body.get("record")
        if not isinstance(record, dict):
            return RemoteResult.fail("Invalid response body")
        return RemoteResult.ok(document_id=bin_id, data=record)

    async def update(self, data: dict[str, Any]) -> RemoteResult:
        """bin 덮어쓰기 (bin ID가 없으면 생성)"""
        if not self.is_configured:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)

        bin_id = self.bin_id
        if not bin_id:
            return await self.create(data)

        _, error = await self._request(
            "PUT",
            f"/b/{bin_id}",
            "Failed to update bin",
            self._headers(with_body=True),
            data,
        )
        if error is not None:
            return RemoteResult.fail(error)
        return RemoteResult.ok(document_id=bin_id)
