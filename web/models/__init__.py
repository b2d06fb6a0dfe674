"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    CarryPaymentRequest,
    MarkPaidRequest,
    MarkPartialRequest,
    NoteRequest,
    PayOffRequest,
    PlayerCreateRequest,
    PlayerRenameRequest,
    RosterPlayerAddRequest,
    StakeRequest,
    WeekCreateRequest,
    WeekDuplicateRequest,
    WeekPlayerCreateRequest,
)
from web.models.responses import (
    CarryPaymentResponse,
    HealthResponse,
    ImportResponse,
    PlayerCarryBreakdownResponse,
    PlayerListResponse,
    PlayerResponse,
    PlayerWeekResponse,
    RunningBalanceResponse,
    SyncResultResponse,
    SyncStatusResponse,
    WeekDetailResponse,
    WeekListResponse,
    WeekSummaryResponse,
)

__all__ = [
    # Requests
    "CarryPaymentRequest",
    "MarkPaidRequest",
    "MarkPartialRequest",
    "NoteRequest",
    "PayOffRequest",
    "PlayerCreateRequest",
    "PlayerRenameRequest",
    "RosterPlayerAddRequest",
    "StakeRequest",
    "WeekCreateRequest",
    "WeekDuplicateRequest",
    "WeekPlayerCreateRequest",
    # Responses
    "CarryPaymentResponse",
    "HealthResponse",
    "ImportResponse",
    "PlayerCarryBreakdownResponse",
    "PlayerListResponse",
    "PlayerResponse",
    "PlayerWeekResponse",
    "RunningBalanceResponse",
    "SyncResultResponse",
    "SyncStatusResponse",
    "WeekDetailResponse",
    "WeekListResponse",
    "WeekSummaryResponse",
]
