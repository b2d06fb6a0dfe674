"""
장부 조회 모델

LedgerStore 읽기 전용 집계 결과 타입.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from core.ledger.player import CarryPayment
from core.utils.money import ZERO


@dataclass(frozen=True)
class WeekBalanceLine:
    """마감 주간별 수금 요약"""

    week_id: str
    week_name: str
    expected: Decimal
    collected: Decimal
    outstanding: Decimal


@dataclass(frozen=True)
class RunningBalance:
    """마감 주간 전체 누적 수금 현황"""

    total_expected: Decimal = ZERO
    total_collected: Decimal = ZERO
    total_outstanding: Decimal = ZERO
    weekly_breakdown: list[WeekBalanceLine] = field(default_factory=list)


@dataclass(frozen=True)
class WeekCarryLine:
    """특정 플레이어의 주간별 이월 내역

    paid는 해당 주간을 지정해 납부한 금액 합계, remaining은 그 차액(0 이상).
    """

    week_id: str
    week_name: str
    closed_date: str | None
    carry_amount: Decimal
    paid: Decimal
    remaining: Decimal


@dataclass(frozen=True)
class PlayerCarryBreakdown:
    """플레이어 이월 잔액 상세"""

    player_id: str
    name: str
    account_number: int
    carry_balance: Decimal
    total_paid: Decimal
    weeks: list[WeekCarryLine] = field(default_factory=list)
    lump_sum_payments: list[CarryPayment] = field(default_factory=list)

    @property
    def total_carried(self) -> Decimal:
        """마감 주간들에서 발생한 이월 합계"""
        return sum((line.carry_amount for line in self.weeks), ZERO)
