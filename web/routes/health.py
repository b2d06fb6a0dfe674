"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
"""

from fastapi import APIRouter, Depends

from core.ledger.store import LedgerStore
from web.dependencies import get_ledger_store
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check(store: LedgerStore = Depends(get_ledger_store)) -> HealthResponse:
    """서버 상태 확인

    Returns:
        HealthResponse: status, version, 클라우드 동기화 사용 여부
    """
    return HealthResponse(
        status="ok",
        version=API_VERSION,
        cloud_sync=store.cloud is not None and store.cloud.enabled,
    )
