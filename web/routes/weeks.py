"""
Weeks 라우트

주간 장부 생성/편집, 마감 검토, 마감/재오픈, 다음 주간 생성 API

상태 규칙:
- 스테이크/멤버 편집: active 주간만
- 결제 상태 변경: pending_close 주간만
- 규칙 위반은 409
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from core.ledger.player_week import PlayerWeekRecord
from core.ledger.store import LedgerStore
from core.ledger.week import WeekLedger
from web.dependencies import get_ledger_service, get_ledger_store
from web.models.requests import (
    MarkPaidRequest,
    MarkPartialRequest,
    NoteRequest,
    RosterPlayerAddRequest,
    StakeRequest,
    WeekCreateRequest,
    WeekDuplicateRequest,
    WeekPlayerCreateRequest,
)
from web.models.responses import (
    PlayerWeekResponse,
    WeekDetailResponse,
    WeekListResponse,
)
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/weeks", tags=["Weeks"])


def _get_week_or_404(store: LedgerStore, week_id: str) -> WeekLedger:
    week = store.get_week(week_id)
    if week is None:
        raise HTTPException(status_code=404, detail=f"Week not found: {week_id}")
    return week


def _get_record_or_404(store: LedgerStore, week_id: str, record_id: str) -> PlayerWeekRecord:
    week = _get_week_or_404(store, week_id)
    record = week.get_player(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Player record not found: {record_id}")
    return record


def _conflict(week: WeekLedger, action: str) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail=f"Cannot {action} while week is {week.status.value}",
    )


# =========================================================================
# 주간
# =========================================================================


@router.get("", response_model=WeekListResponse)
async def list_weeks(service: LedgerService = Depends(get_ledger_service)) -> WeekListResponse:
    """주간 목록 조회"""
    return service.week_list()


@router.post("", response_model=WeekDetailResponse, status_code=201)
async def create_week(
    request: WeekCreateRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """빈 주간 생성"""
    week = service.store.create_week(request.name, request.start, request.end)
    if week is None:
        raise HTTPException(
            status_code=400,
            detail="start/end must be ISO-8601 timestamps with end after start",
        )
    return service.week_detail(week)


@router.get("/active", response_model=WeekDetailResponse)
async def get_active_week(service: LedgerService = Depends(get_ledger_service)) -> WeekDetailResponse:
    """현재 활성 주간 조회"""
    week = service.store.active_week
    if week is None:
        raise HTTPException(status_code=404, detail="No active week")
    return service.week_detail(week)


@router.get("/{week_id}", response_model=WeekDetailResponse)
async def get_week(
    week_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """주간 상세 조회"""
    return service.week_detail(_get_week_or_404(service.store, week_id))


@router.delete("/{week_id}", status_code=204)
async def delete_week(
    week_id: str,
    store: LedgerStore = Depends(get_ledger_store),
) -> Response:
    """주간 삭제"""
    if not store.delete_week(week_id):
        raise HTTPException(status_code=404, detail=f"Week not found: {week_id}")
    return Response(status_code=204)


@router.post("/{week_id}/activate", response_model=WeekDetailResponse)
async def activate_week(
    week_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """활성 주간 포인터 설정"""
    if not service.store.set_active_week(week_id):
        raise HTTPException(status_code=404, detail=f"Week not found: {week_id}")
    return service.week_detail(_get_week_or_404(service.store, week_id))


# =========================================================================
# 멤버
# =========================================================================


@router.post("/{week_id}/players", response_model=PlayerWeekResponse, status_code=201)
async def add_week_player(
    week_id: str,
    request: WeekPlayerCreateRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerWeekResponse:
    """주간에 플레이어 추가 (active 주간, 계좌번호 중복 불가)"""
    week = _get_week_or_404(service.store, week_id)
    record = service.store.add_week_player(week_id, request.name, request.account_number)
    if record is None:
        raise _conflict(week, f"add account {request.account_number}")
    return service.record_response(record)


@router.post("/{week_id}/players/from-roster", response_model=PlayerWeekResponse, status_code=201)
async def add_roster_player(
    week_id: str,
    request: RosterPlayerAddRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerWeekResponse:
    """로스터 플레이어를 주간에 추가"""
    store = service.store
    week = _get_week_or_404(store, week_id)
    if store.get_player(request.player_id) is None:
        raise HTTPException(status_code=404, detail=f"Player not found: {request.player_id}")

    record = store.add_roster_player_to_week(week_id, request.player_id)
    if record is None:
        raise _conflict(week, "add roster player")
    return service.record_response(record)


@router.post("/{week_id}/populate", response_model=WeekDetailResponse)
async def populate_from_roster(
    week_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """주간에 없는 로스터 플레이어 전원 추가"""
    week = _get_week_or_404(service.store, week_id)
    if not week.is_active:
        raise _conflict(week, "add players")
    service.store.populate_week_from_roster(week_id)
    return service.week_detail(week)


@router.delete("/{week_id}/players/{record_id}", status_code=204)
async def remove_week_player(
    week_id: str,
    record_id: str,
    store: LedgerStore = Depends(get_ledger_store),
) -> Response:
    """주간 플레이어 레코드 삭제"""
    _get_record_or_404(store, week_id, record_id)
    if not store.remove_week_player(week_id, record_id):
        raise _conflict(store.get_week(week_id), "remove players")
    return Response(status_code=204)


# =========================================================================
# 스테이크 / 메모
# =========================================================================


@router.put("/{week_id}/players/{record_id}/in", response_model=PlayerWeekResponse)
async def set_player_in(
    week_id: str,
    record_id: str,
    request: StakeRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerWeekResponse:
    """플레이어가 낼 금액 입력"""
    _get_record_or_404(service.store, week_id, record_id)
    record = service.store.set_player_in(week_id, record_id, request.amount)
    if record is None:
        raise _conflict(service.store.get_week(week_id), "edit stakes")
    return service.record_response(record)


@router.put("/{week_id}/players/{record_id}/out", response_model=PlayerWeekResponse)
async def set_player_out(
    week_id: str,
    record_id: str,
    request: StakeRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerWeekResponse:
    """하우스가 줄 금액 입력"""
    _get_record_or_404(service.store, week_id, record_id)
    record = service.store.set_player_out(week_id, record_id, request.amount)
    if record is None:
        raise _conflict(service.store.get_week(week_id), "edit stakes")
    return service.record_response(record)


@router.put("/{week_id}/players/{record_id}/note", response_model=PlayerWeekResponse)
async def set_player_note(
    week_id: str,
    record_id: str,
    request: NoteRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerWeekResponse:
    """메모 변경 (마감 주간 제외)"""
    _get_record_or_404(service.store, week_id, record_id)
    record = service.store.set_player_note(week_id, record_id, request.note)
    if record is None:
        raise _conflict(service.store.get_week(week_id), "edit notes")
    return service.record_response(record)


# =========================================================================
# 마감 검토
# =========================================================================


@router.post("/{week_id}/players/{record_id}/paid", response_model=PlayerWeekResponse)
async def mark_player_paid(
    week_id: str,
    record_id: str,
    request: MarkPaidRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerWeekResponse:
    """정산 완료 처리"""
    _get_record_or_404(service.store, week_id, record_id)
    record = service.store.mark_player_paid(week_id, record_id, request.amount)
    if record is None:
        raise _conflict(service.store.get_week(week_id), "mark payments")
    return service.record_response(record)


@router.post("/{week_id}/players/{record_id}/unpaid", response_model=PlayerWeekResponse)
async def mark_player_unpaid(
    week_id: str,
    record_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerWeekResponse:
    """미납 처리 (마감 시 전액 이월)"""
    _get_record_or_404(service.store, week_id, record_id)
    record = service.store.mark_player_unpaid(week_id, record_id)
    if record is None:
        raise _conflict(service.store.get_week(week_id), "mark payments")
    return service.record_response(record)


@router.post("/{week_id}/players/{record_id}/partial", response_model=PlayerWeekResponse)
async def mark_player_partial(
    week_id: str,
    record_id: str,
    request: MarkPartialRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerWeekResponse:
    """부분 정산 처리 (마감 시 차액 이월)"""
    _get_record_or_404(service.store, week_id, record_id)
    record = service.store.mark_player_partial(week_id, record_id, request.amount)
    if record is None:
        raise _conflict(service.store.get_week(week_id), "mark payments")
    return service.record_response(record)


@router.post("/{week_id}/players/{record_id}/reset", response_model=PlayerWeekResponse)
async def reset_player_payment(
    week_id: str,
    record_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> PlayerWeekResponse:
    """결제 상태 초기화 (pending)"""
    _get_record_or_404(service.store, week_id, record_id)
    record = service.store.reset_player_payment(week_id, record_id)
    if record is None:
        raise _conflict(service.store.get_week(week_id), "mark payments")
    return service.record_response(record)


@router.post("/{week_id}/mark-all-paid", response_model=WeekDetailResponse)
async def mark_all_paid(
    week_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """금액이 있는 모든 플레이어 정산 완료 처리"""
    week = _get_week_or_404(service.store, week_id)
    if not service.store.mark_all_paid(week_id):
        raise _conflict(week, "mark payments")
    return service.week_detail(week)


# =========================================================================
# 생명주기
# =========================================================================


@router.post("/{week_id}/start-close", response_model=WeekDetailResponse)
async def start_close(
    week_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """마감 검토 시작 (active → pending_close)"""
    week = _get_week_or_404(service.store, week_id)
    if not service.store.start_close(week_id):
        raise _conflict(week, "start close")
    return service.week_detail(week)


@router.post("/{week_id}/cancel-close", response_model=WeekDetailResponse)
async def cancel_close(
    week_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """마감 검토 취소 (결제 상태 초기화)"""
    week = _get_week_or_404(service.store, week_id)
    if not service.store.cancel_close(week_id):
        raise _conflict(week, "cancel close")
    return service.week_detail(week)


@router.post("/{week_id}/close", response_model=WeekDetailResponse)
async def close_week(
    week_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """주간 마감 + 로스터 이월 잔액 반영"""
    week = _get_week_or_404(service.store, week_id)
    if not service.store.close_week_and_update_carries(week_id):
        raise _conflict(week, "close")
    return service.week_detail(week)


@router.post("/{week_id}/reopen", response_model=WeekDetailResponse)
async def reopen_week(
    week_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """마감 주간 재오픈 + 로스터 이월 잔액 복원"""
    week = _get_week_or_404(service.store, week_id)
    if not service.store.reopen_week(week_id):
        raise _conflict(week, "reopen")
    return service.week_detail(week)


@router.post("/{week_id}/next", response_model=WeekDetailResponse, status_code=201)
async def create_next_week(
    week_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """마감 주간의 이월로 다음 주간 생성 (활성 주간으로 설정)"""
    week = _get_week_or_404(service.store, week_id)
    new_week = service.store.create_next_week_from_closed(week_id)
    if new_week is None:
        raise _conflict(week, "create next week")
    return service.week_detail(new_week)


@router.post("/{week_id}/duplicate", response_model=WeekDetailResponse, status_code=201)
async def duplicate_week(
    week_id: str,
    request: WeekDuplicateRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> WeekDetailResponse:
    """주간 복제 (스테이크 0, 결과를 이월로 시드)"""
    _get_week_or_404(service.store, week_id)
    new_week = service.store.duplicate_week(week_id, request.name)
    return service.week_detail(new_week)
