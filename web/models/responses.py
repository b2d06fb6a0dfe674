"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화

금액은 정밀도 유지를 위해 문자열로 반환.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="API 버전")
    cloud_sync: bool = Field(..., description="클라우드 동기화 사용 여부")


# =========================================================================
# 플레이어
# =========================================================================


class CarryPaymentResponse(BaseModel):
    """이월 잔액 납부 기록"""

    id: str
    amount: str
    date: str
    note: str = ""
    week_id: str | None = None


class PlayerResponse(BaseModel):
    """로스터 플레이어"""

    id: str
    name: str
    account_number: int
    carry_balance: str = Field(..., description="미납 누적 이월 잔액")
    total_paid: str = Field(..., description="이월 잔액 납부 합계")
    created: str
    carry_payments: list[CarryPaymentResponse] = Field(default_factory=list)


class PlayerListResponse(BaseModel):
    """로스터 목록"""

    players: list[PlayerResponse]
    count: int


class WeekCarryLineResponse(BaseModel):
    """주간별 이월 내역"""

    week_id: str
    week_name: str
    closed_date: str | None
    carry_amount: str
    paid: str
    remaining: str


class PlayerCarryBreakdownResponse(BaseModel):
    """플레이어 이월 잔액 상세"""

    player_id: str
    name: str
    account_number: int
    carry_balance: str
    total_paid: str
    total_carried: str
    weeks: list[WeekCarryLineResponse]
    lump_sum_payments: list[CarryPaymentResponse]


# =========================================================================
# 주간
# =========================================================================


class PlayerWeekResponse(BaseModel):
    """주간 플레이어 레코드"""

    id: str
    name: str
    account_number: int
    amount: str = Field(..., description="양수: 플레이어 지불, 음수: 하우스 지불")
    result: str
    vig: str
    carried: bool
    carry_amount: str
    carry_from_week_id: str | None
    prior_carry_balance: str
    accumulated_owed: str
    payment_status: str
    paid_amount: str
    paid_date: str | None
    total_owed: str
    outstanding_balance: str
    overpayment: str
    carry_forward: str
    note: str


class WeekSummaryResponse(BaseModel):
    """주간 요약"""

    id: str
    name: str
    start: str
    end: str
    status: str
    is_active_week: bool = Field(..., description="현재 활성 주간 여부")
    player_count: int
    in_total: str
    out_total: str
    vig: str
    result: str
    expected_in: str
    actual_collected: str
    uncollected: str
    collection_rate: str
    total_carried_in: str
    total_carried_out: str
    closed_date: str | None
    previous_week_id: str | None
    next_week_id: str | None


class WeekDetailResponse(WeekSummaryResponse):
    """주간 상세 (플레이어 레코드 포함)"""

    players: list[PlayerWeekResponse]


class WeekListResponse(BaseModel):
    """주간 목록"""

    weeks: list[WeekSummaryResponse]
    active_week_id: str | None
    count: int


# =========================================================================
# 요약
# =========================================================================


class WeekBalanceLineResponse(BaseModel):
    """마감 주간별 수금 요약"""

    week_id: str
    week_name: str
    expected: str
    collected: str
    outstanding: str


class RunningBalanceResponse(BaseModel):
    """마감 주간 누적 수금 현황"""

    total_expected: str
    total_collected: str
    total_outstanding: str
    weekly_breakdown: list[WeekBalanceLineResponse]


# =========================================================================
# 동기화
# =========================================================================


class SyncStatusResponse(BaseModel):
    """클라우드 동기화 상태"""

    enabled: bool
    state: str = Field(..., description="idle/syncing/success/error")
    last_error: str | None
    last_synced: str | None
    has_pending_push: bool


class SyncResultResponse(BaseModel):
    """동기화 실행 결과"""

    success: bool
    document_id: str | None = None
    error: str | None = None


class ImportResponse(BaseModel):
    """백업 가져오기 결과"""

    success: bool
    weeks: int
    players: int
