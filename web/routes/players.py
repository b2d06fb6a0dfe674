"""
Players 라우트

로스터 관리 및 이월 잔액 납부 API
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from core.ledger.store import LedgerStore
from web.dependencies import get_ledger_service, get_ledger_store
from web.models.requests import (
    CarryPaymentRequest,
    PayOffRequest,
    PlayerCreateRequest,
    PlayerRenameRequest,
)
from web.models.responses import (
    CarryPaymentResponse,
    PlayerCarryBreakdownResponse,
    PlayerListResponse,
    PlayerResponse,
)
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/players", tags=["Players"])


def _require_account(store: LedgerStore, account_number: int) -> None:
    if store.get_player_by_account(account_number) is None:
        raise HTTPException(status_code=404, detail=f"Player not found: account {account_number}")


@router.get("", response_model=PlayerListResponse)
async def list_players(service: LedgerService = Depends(get_ledger_service)) -> PlayerListResponse:
    """로스터 목록 조회"""
    return service.player_list()


@router.post("", response_model=PlayerResponse, status_code=201)
async def create_player(
    request: PlayerCreateRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerResponse:
    """로스터 플레이어 추가

    같은 계좌번호가 이미 있으면 409.
    """
    player = service.store.add_player(request.name, request.account_number)
    if player is None:
        raise HTTPException(
            status_code=409,
            detail=f"Account number already in roster: {request.account_number}",
        )
    return service.player_response(player)


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(
    player_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerResponse:
    """로스터 플레이어 조회"""
    player = service.store.get_player(player_id)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")
    return service.player_response(player)


@router.patch("/{player_id}", response_model=PlayerResponse)
async def rename_player(
    player_id: str,
    request: PlayerRenameRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerResponse:
    """플레이어 이름 변경"""
    player = service.store.rename_player(player_id, request.name)
    if player is None:
        raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")
    return service.player_response(player)


@router.delete("/{player_id}", status_code=204)
async def delete_player(
    player_id: str,
    store: LedgerStore = Depends(get_ledger_store),
) -> Response:
    """로스터 플레이어 삭제 (과거 주간 레코드는 유지)"""
    if not store.remove_player(player_id):
        raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")
    return Response(status_code=204)


# =========================================================================
# 이월 잔액 (계좌번호 기준)
# =========================================================================


@router.get("/accounts/{account_number}/carry", response_model=PlayerCarryBreakdownResponse)
async def get_carry_breakdown(
    account_number: int,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerCarryBreakdownResponse:
    """플레이어 이월 잔액 주간별 상세"""
    breakdown = service.store.get_player_carry_breakdown(account_number)
    if breakdown is None:
        raise HTTPException(status_code=404, detail=f"Player not found: account {account_number}")
    return service.breakdown_response(breakdown)


@router.post(
    "/accounts/{account_number}/carry-payments",
    response_model=CarryPaymentResponse,
    status_code=201,
)
async def record_carry_payment(
    account_number: int,
    request: CarryPaymentRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> CarryPaymentResponse:
    """이월 잔액 납부 기록

    week_id가 있으면 해당 주간 이월분으로 기록.
    잔액이 없으면 409, 기록 금액은 잔액을 넘지 않음.
    """
    store = service.store
    _require_account(store, account_number)

    if request.week_id is not None:
        if store.get_week(request.week_id) is None:
            raise HTTPException(status_code=404, detail=f"Week not found: {request.week_id}")
        payment = store.record_week_carry_payment(
            account_number, request.week_id, request.amount, request.note
        )
    else:
        payment = store.record_carry_payment(account_number, request.amount, request.note)

    if payment is None:
        raise HTTPException(status_code=409, detail="No outstanding carry balance")
    return service.payment_response(payment)


@router.post(
    "/accounts/{account_number}/pay-off",
    response_model=CarryPaymentResponse,
    status_code=201,
)
async def pay_off_all_carry(
    account_number: int,
    request: PayOffRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> CarryPaymentResponse:
    """이월 잔액 전액 납부"""
    store = service.store
    _require_account(store, account_number)

    payment = store.pay_off_all_carry(account_number, request.note)
    if payment is None:
        raise HTTPException(status_code=409, detail="No outstanding carry balance")
    return service.payment_response(payment)


@router.delete("/accounts/{account_number}/carry-payments/{payment_id}", status_code=204)
async def undo_carry_payment(
    account_number: int,
    payment_id: str,
    store: LedgerStore = Depends(get_ledger_store),
) -> Response:
    """납부 기록 취소 (금액을 잔액에 되돌림)"""
    _require_account(store, account_number)
    if not store.undo_carry_payment(account_number, payment_id):
        raise HTTPException(status_code=404, detail=f"Payment not found: {payment_id}")
    return Response(status_code=204)
