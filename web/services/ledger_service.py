"""
Ledger 서비스

LedgerStore 도메인 객체 → API 응답 스키마 변환
"""

from decimal import Decimal

from core.ledger.player import CarryPayment, PlayerRecord
from core.ledger.player_week import PlayerWeekRecord
from core.ledger.store import LedgerStore
from core.ledger.types import PlayerCarryBreakdown, RunningBalance
from core.ledger.week import WeekLedger
from web.models.responses import (
    CarryPaymentResponse,
    PlayerCarryBreakdownResponse,
    PlayerListResponse,
    PlayerResponse,
    PlayerWeekResponse,
    RunningBalanceResponse,
    SyncStatusResponse,
    WeekBalanceLineResponse,
    WeekCarryLineResponse,
    WeekDetailResponse,
    WeekListResponse,
    WeekSummaryResponse,
)


def format_amount(value: Decimal) -> str:
    """금액 문자열 (불필요한 소수점 0 제거)

    Decimal("15.00") → "15", Decimal("12.50") → "12.5"
    """
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


class LedgerService:
    """Ledger 서비스

    조회 응답 조립 담당. 변경은 라우트가 LedgerStore를 직접 호출.

    Args:
        store: LedgerStore
    """

    def __init__(self, store: LedgerStore):
        self.store = store

    # -------------------------------------------------------------------------
    # 플레이어
    # -------------------------------------------------------------------------

    @staticmethod
    def payment_response(payment: CarryPayment) -> CarryPaymentResponse:
        return CarryPaymentResponse(
            id=payment.id,
            amount=format_amount(payment.amount),
            date=payment.date,
            note=payment.note,
            week_id=payment.week_id,
        )

    def player_response(self, player: PlayerRecord) -> PlayerResponse:
        return PlayerResponse(
            id=player.id,
            name=player.name,
            account_number=player.account_number,
            carry_balance=format_amount(player.carry_balance),
            total_paid=format_amount(player.total_paid),
            created=player.created,
            carry_payments=[self.payment_response(p) for p in player.carry_payments],
        )

    def player_list(self) -> PlayerListResponse:
        players = self.store.players
        return PlayerListResponse(
            players=[self.player_response(p) for p in players],
            count=len(players),
        )

    def breakdown_response(self, breakdown: PlayerCarryBreakdown) -> PlayerCarryBreakdownResponse:
        return PlayerCarryBreakdownResponse(
            player_id=breakdown.player_id,
            name=breakdown.name,
            account_number=breakdown.account_number,
            carry_balance=format_amount(breakdown.carry_balance),
            total_paid=format_amount(breakdown.total_paid),
            total_carried=format_amount(breakdown.total_carried),
            weeks=[
                WeekCarryLineResponse(
                    week_id=line.week_id,
                    week_name=line.week_name,
                    closed_date=line.closed_date,
                    carry_amount=format_amount(line.carry_amount),
                    paid=format_amount(line.paid),
                    remaining=format_amount(line.remaining),
                )
                for line in breakdown.weeks
            ],
            lump_sum_payments=[self.payment_response(p) for p in breakdown.lump_sum_payments],
        )

    # -------------------------------------------------------------------------
    # 주간
    # -------------------------------------------------------------------------

    @staticmethod
    def record_response(record: PlayerWeekRecord) -> PlayerWeekResponse:
        return PlayerWeekResponse(
            id=record.id,
            name=record.name,
            account_number=record.account_number,
            amount=format_amount(record.amount),
            result=format_amount(record.result),
            vig=format_amount(record.vig),
            carried=record.carried,
            carry_amount=format_amount(record.carry_amount),
            carry_from_week_id=record.carry_from_week_id,
            prior_carry_balance=format_amount(record.prior_carry_balance),
            accumulated_owed=format_amount(record.accumulated_owed),
            payment_status=record.payment_status.value,
            paid_amount=format_amount(record.paid_amount),
            paid_date=record.paid_date,
            total_owed=format_amount(record.total_owed),
            outstanding_balance=format_amount(record.outstanding_balance),
            overpayment=format_amount(record.overpayment),
            carry_forward=format_amount(record.carry_forward),
            note=record.note,
        )

    def _summary_fields(self, week: WeekLedger) -> dict:
        return {
            "id": week.id,
            "name": week.name,
            "start": week.start,
            "end": week.end,
            "status": week.status.value,
            "is_active_week": week.id == self.store.active_week_id,
            "player_count": week.player_count,
            "in_total": format_amount(week.in_total),
            "out_total": format_amount(week.out_total),
            "vig": format_amount(week.vig),
            "result": format_amount(week.result),
            "expected_in": format_amount(week.expected_in),
            "actual_collected": format_amount(week.actual_collected),
            "uncollected": format_amount(week.uncollected),
            "collection_rate": format_amount(week.collection_rate.quantize(Decimal("0.01"))),
            "total_carried_in": format_amount(week.total_carried_in),
            "total_carried_out": format_amount(week.total_carried_out),
            "closed_date": week.closed_date,
            "previous_week_id": week.previous_week_id,
            "next_week_id": week.next_week_id,
        }

    def week_summary(self, week: WeekLedger) -> WeekSummaryResponse:
        return WeekSummaryResponse(**self._summary_fields(week))

    def week_detail(self, week: WeekLedger) -> WeekDetailResponse:
        return WeekDetailResponse(
            **self._summary_fields(week),
            players=[self.record_response(r) for r in week.players],
        )

    def week_list(self) -> WeekListResponse:
        weeks = self.store.weeks
        return WeekListResponse(
            weeks=[self.week_summary(w) for w in weeks],
            active_week_id=self.store.active_week_id,
            count=len(weeks),
        )

    # -------------------------------------------------------------------------
    # 요약 / 동기화
    # -------------------------------------------------------------------------

    def running_balance(self) -> RunningBalanceResponse:
        balance: RunningBalance = self.store.get_running_balance()
        return RunningBalanceResponse(
            total_expected=format_amount(balance.total_expected),
            total_collected=format_amount(balance.total_collected),
            total_outstanding=format_amount(balance.total_outstanding),
            weekly_breakdown=[
                WeekBalanceLineResponse(
                    week_id=line.week_id,
                    week_name=line.week_name,
                    expected=format_amount(line.expected),
                    collected=format_amount(line.collected),
                    outstanding=format_amount(line.outstanding),
                )
                for line in balance.weekly_breakdown
            ],
        )

    def sync_status(self) -> SyncStatusResponse:
        cloud = self.store.cloud
        if cloud is None:
            return SyncStatusResponse(
                enabled=False,
                state=self.store.sync_state.value,
                last_error=None,
                last_synced=None,
                has_pending_push=False,
            )
        return SyncStatusResponse(
            enabled=cloud.enabled,
            state=cloud.state.value,
            last_error=cloud.last_error,
            last_synced=cloud.last_synced,
            has_pending_push=cloud.has_pending_push,
        )
