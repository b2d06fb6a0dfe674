"""
Summary 라우트

GET /api/summary/running-balance - 마감 주간 누적 수금 현황
"""

from fastapi import APIRouter, Depends

from web.dependencies import get_ledger_service
from web.models.responses import RunningBalanceResponse
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/summary", tags=["Summary"])


@router.get("/running-balance", response_model=RunningBalanceResponse)
async def get_running_balance(
    service: LedgerService = Depends(get_ledger_service),
) -> RunningBalanceResponse:
    """마감 주간 전체 기대/실제 수금 합계와 주간별 내역"""
    return service.running_balance()
