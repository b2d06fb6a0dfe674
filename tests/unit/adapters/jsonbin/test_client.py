"""
JSONBin 클라이언트 테스트

JSONBinClient HTTP 요청 테스트 (httpx mock 사용).
"""

from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from adapters.jsonbin.client import JSONBinClient
from adapters.mock.memory_store import MemoryKeyValueStore
from adapters.models import NO_DOCUMENT_ID_ERROR, NOT_CONFIGURED_ERROR
from core.constants import StorageKeys

BASE_URL = "https://jsonbin.example.com/v3"


def make_client(kv: MemoryKeyValueStore | None = None, **kwargs: Any) -> JSONBinClient:
    return JSONBinClient(
        api_key=kwargs.pop("api_key", "test_master_key"),
        kv=kv if kv is not None else MemoryKeyValueStore(),
        base_url=kwargs.pop("base_url", BASE_URL + "/"),
        **kwargs,
    )


def make_response(status_code: int, body: Any = None) -> httpx.Response:
    if body is None:
        return httpx.Response(status_code, content=b"")
    return httpx.Response(status_code, json=body)


class TestJSONBinClientConfig:
    """설정/bin ID 테스트"""

    def test_not_configured_without_api_key(self) -> None:
        assert not make_client(api_key=None).is_configured
        assert not make_client(api_key="").is_configured

    def test_base_url_trailing_slash_removed(self) -> None:
        assert make_client().base_url == BASE_URL

    def test_bin_id_from_kv(self) -> None:
        kv = MemoryKeyValueStore({StorageKeys.JSONBIN_ID: "cached-bin"})

        client = make_client(kv)

        assert client.bin_id == "cached-bin"
        assert client.has_bin

    def test_fixed_bin_id_takes_precedence(self) -> None:
        kv = MemoryKeyValueStore({StorageKeys.JSONBIN_ID: "cached-bin"})

        client = make_client(kv, bin_id="fixed-bin")

        assert client.bin_id == "fixed-bin"

    def test_no_bin(self) -> None:
        assert not make_client().has_bin

    @pytest.mark.asyncio
    async def test_not_configured_calls_fail(self) -> None:
        client = make_client(api_key=None)

        assert (await client.create({})).error == NOT_CONFIGURED_ERROR
        assert (await client.read()).error == NOT_CONFIGURED_ERROR
        assert (await client.update({})).error == NOT_CONFIGURED_ERROR


class TestJSONBinClientCreate:
    """bin 생성 테스트"""

    @pytest.mark.asyncio
    async def test_create_caches_bin_id(self) -> None:
        kv = MemoryKeyValueStore()
        client = make_client(kv, collection_id="collection-1")

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(
                200, {"record": {"weeks": []}, "metadata": {"id": "bin-123", "private": True}}
            )
            mock_get_client.return_value = mock_http_client

            result = await client.create({"weeks": []})

            assert result.success
            assert result.document_id == "bin-123"
            assert kv.get(StorageKeys.JSONBIN_ID) == "bin-123"

            method, url = mock_http_client.request.call_args.args
            headers = mock_http_client.request.call_args.kwargs["headers"]
            assert method == "POST"
            assert url == f"{BASE_URL}/b"
            assert headers["X-Master-Key"] == "test_master_key"
            assert headers["Content-Type"] == "application/json"
            assert headers["X-Bin-Name"] == "slide-app-data"
            assert headers["X-Bin-Private"] == "true"
            assert headers["X-Collection-Id"] == "collection-1"
            assert mock_http_client.request.call_args.kwargs["json"] == {"weeks": []}

    @pytest.mark.asyncio
    async def test_create_without_collection(self) -> None:
        client = make_client()

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(200, {"metadata": {"id": "bin-1"}})
            mock_get_client.return_value = mock_http_client

            await client.create({})

            headers = mock_http_client.request.call_args.kwargs["headers"]
            assert "X-Collection-Id" not in headers

    @pytest.mark.asyncio
    async def test_create_api_error_message(self) -> None:
        """응답 message를 에러 문자열로 사용"""
        kv = MemoryKeyValueStore()
        client = make_client(kv)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(
                401, {"message": "Invalid X-Master-Key provided"}
            )
            mock_get_client.return_value = mock_http_client

            result = await client.create({})

            assert not result.success
            assert result.error == "Invalid X-Master-Key provided"
            assert kv.get(StorageKeys.JSONBIN_ID) is None

    @pytest.mark.asyncio
    async def test_create_api_error_fallback(self) -> None:
        client = make_client()

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(500)
            mock_get_client.return_value = mock_http_client

            result = await client.create({})

            assert result.error == "Failed to create bin"

    @pytest.mark.asyncio
    async def test_create_missing_metadata(self) -> None:
        client = make_client()

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(200, {"record": {}})
            mock_get_client.return_value = mock_http_client

            result = await client.create({})

            assert result.error == "Invalid response body"


class TestJSONBinClientRead:
    """bin 조회 테스트"""

    @pytest.mark.asyncio
    async def test_read_without_bin(self) -> None:
        """bin ID 없으면 요청 없이 실패"""
        client = make_client()

        with patch.object(client, "_get_client") as mock_get_client:
            result = await client.read()

            assert result.error == NO_DOCUMENT_ID_ERROR
            assert result.is_not_synced_yet
            mock_get_client.assert_not_called()

    @pytest.mark.asyncio
    async def test_read_returns_record(self) -> None:
        client = make_client(bin_id="bin-9")

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(
                200, {"record": {"version": 1, "weeks": []}, "metadata": {"id": "bin-9"}}
            )
            mock_get_client.return_value = mock_http_client

            result = await client.read()

            assert result.success
            assert result.document_id == "bin-9"
            assert result.data == {"version": 1, "weeks": []}

            method, url = mock_http_client.request.call_args.args
            headers = mock_http_client.request.call_args.kwargs["headers"]
            assert method == "GET"
            assert url == f"{BASE_URL}/b/bin-9"
            assert "Content-Type" not in headers

    @pytest.mark.asyncio
    async def test_read_not_found(self) -> None:
        client = make_client(bin_id="gone")

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(404, {"message": "Bin not found"})
            mock_get_client.return_value = mock_http_client

            result = await client.read()

            assert result.error == "Bin not found"

    @pytest.mark.asyncio
    async def test_read_invalid_record(self) -> None:
        client = make_client(bin_id="bin-9")

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(200, {"record": [1, 2]})
            mock_get_client.return_value = mock_http_client

            result = await client.read()

            assert result.error == "Invalid response body"


class TestJSONBinClientUpdate:
    """bin 갱신 테스트"""

    @pytest.mark.asyncio
    async def test_update_existing_bin(self) -> None:
        kv = MemoryKeyValueStore({StorageKeys.JSONBIN_ID: "bin-5"})
        client = make_client(kv)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(200, {"record": {"n": 1}})
            mock_get_client.return_value = mock_http_client

            result = await client.update({"n": 1})

            assert result.success
            assert result.document_id == "bin-5"
            method, url = mock_http_client.request.call_args.args
            assert method == "PUT"
            assert url == f"{BASE_URL}/b/bin-5"

    @pytest.mark.asyncio
    async def test_update_without_bin_creates(self) -> None:
        kv = MemoryKeyValueStore()
        client = make_client(kv)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(200, {"metadata": {"id": "new-bin"}})
            mock_get_client.return_value = mock_http_client

            result = await client.update({"n": 1})

            assert result.document_id == "new-bin"
            assert mock_http_client.request.call_args.args[0] == "POST"
            assert kv.get(StorageKeys.JSONBIN_ID) == "new-bin"


class TestJSONBinClientErrors:
    """네트워크 오류 테스트"""

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        client = make_client(bin_id="bin-1")

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.side_effect = httpx.ReadTimeout("")
            mock_get_client.return_value = mock_http_client

            result = await client.read()

            assert not result.success
            assert result.error == "Request timed out"

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        client = make_client(bin_id="bin-1")

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.side_effect = httpx.ConnectError("connection refused")
            mock_get_client.return_value = mock_http_client

            result = await client.update({})

            assert result.error == "connection refused"


class TestJSONBinClientContextManager:
    """컨텍스트 매니저 테스트"""

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self) -> None:
        async with make_client() as client:
            await client._get_client()
            assert client._client is not None

        assert client._client is None
