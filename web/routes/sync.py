"""
Sync 라우트

클라우드 동기화 및 JSON 백업 API

- GET  /api/sync/status: 동기화 상태
- POST /api/sync/push: 즉시 원격 쓰기
- POST /api/sync/pull: 원격 스냅샷으로 로컬 교체
- GET  /api/sync/export: 백업 JSON
- POST /api/sync/import: 백업 JSON으로 전체 교체
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from adapters.models import RemoteResult
from core.ledger.store import LedgerStore
from web.dependencies import get_ledger_service, get_ledger_store
from web.models.responses import ImportResponse, SyncResultResponse, SyncStatusResponse
from web.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sync", tags=["Sync"])


def _result_response(result: RemoteResult) -> SyncResultResponse:
    return SyncResultResponse(
        success=result.success,
        document_id=result.document_id,
        error=result.error,
    )


@router.get("/status", response_model=SyncStatusResponse)
async def get_sync_status(service: LedgerService = Depends(get_ledger_service)) -> SyncStatusResponse:
    """클라우드 동기화 상태 조회"""
    return service.sync_status()


@router.post("/push", response_model=SyncResultResponse)
async def push_to_cloud(store: LedgerStore = Depends(get_ledger_store)) -> SyncResultResponse:
    """대기 중 예약을 취소하고 즉시 원격 쓰기

    실패는 success=False + error로 반환 (로컬 상태 유지).
    """
    return _result_response(await store.force_sync_to_cloud())


@router.post("/pull", response_model=SyncResultResponse)
async def pull_from_cloud(store: LedgerStore = Depends(get_ledger_store)) -> SyncResultResponse:
    """원격 스냅샷으로 로컬 상태 교체 (병합 없음)"""
    return _result_response(await store.sync_from_cloud())


@router.get("/export")
async def export_json(store: LedgerStore = Depends(get_ledger_store)) -> Response:
    """전체 상태 백업 JSON"""
    return Response(
        content=store.export_json(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="slide-backup.json"'},
    )


@router.post("/import", response_model=ImportResponse)
async def import_json(
    request: Request,
    store: LedgerStore = Depends(get_ledger_store),
) -> ImportResponse:
    """백업 JSON으로 상태 전체 교체

    형식 오류면 400 (기존 상태 유지).
    """
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Request body must be UTF-8 JSON")

    if not store.import_json(text):
        raise HTTPException(status_code=400, detail="Invalid backup data")

    return ImportResponse(success=True, weeks=store.week_count, players=store.player_count)
