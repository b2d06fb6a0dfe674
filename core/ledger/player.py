"""
로스터 플레이어

주간과 무관한 플레이어 정보 + 누적 이월 잔액(carry_balance)과 납부 이력.

carry_balance 불변식:
    carry_balance == max(0, 이월 추가 합계 - 납부 합계), 음수 불가
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from core.constants import Defaults
from core.utils.ids import generate_id
from core.utils.money import ZERO, Amount, to_decimal, to_json_number
from core.utils.timezone import now_iso

logger = logging.getLogger(__name__)


@dataclass
class CarryPayment:
    """이월 잔액 납부 기록

    week_id가 있으면 특정 주간 이월분에 대한 납부, None이면 총액 대상 일시 납부.
    """

    id: str
    amount: Decimal
    date: str
    note: str = ""
    week_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "amount": to_json_number(self.amount),
            "date": self.date,
            "note": self.note,
            "week_id": self.week_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CarryPayment:
        return cls(
            id=data["id"],
            amount=to_decimal(data["amount"]),
            date=data["date"],
            note=data.get("note") or "",
            week_id=data.get("week_id") or None,
        )


@dataclass
class PlayerRecord:
    """로스터 플레이어

    account_number는 로스터 내 고유하며 주간 레코드와의 연결 키.
    """

    name: str = ""
    account_number: int = 0
    id: str = field(default_factory=generate_id)
    carry_balance: Decimal = ZERO
    carry_payments: list[CarryPayment] = field(default_factory=list)
    created: str = field(default_factory=now_iso)

    @property
    def has_carry(self) -> bool:
        return self.carry_balance > 0

    @property
    def total_paid(self) -> Decimal:
        """누적 납부 합계"""
        return sum((p.amount for p in self.carry_payments), ZERO)

    # -------------------------------------------------------------------------
    # 이월 잔액 관리
    # -------------------------------------------------------------------------

    def add_carry(self, amount: Amount) -> None:
        """이월 잔액 추가 (주간 마감 시 미납분)"""
        self.carry_balance += to_decimal(amount)

    def remove_carry(self, amount: Amount) -> None:
        """이월 잔액 차감 (주간 재오픈 시), 0 미만 불가"""
        self.carry_balance = max(ZERO, self.carry_balance - to_decimal(amount))

    def record_payment(
        self,
        amount: Amount,
        note: str = "",
        week_id: str | None = None,
        payment_id: str | None = None,
        now: str | None = None,
    ) -> CarryPayment | None:
        """이월 잔액 납부 기록

        기록 금액은 현재 잔액으로 상한 처리되어, remove_payment로 되돌리면
        납부 전 잔액이 정확히 복원된다. 0 이하 금액이나 잔액 0이면 None.

        Args:
            amount: 납부 금액
            note: 메모
            week_id: 특정 주간 이월분 납부 시 주간 ID
            payment_id: 납부 ID (None이면 생성)
            now: 납부 시각 (None이면 현재)

        Returns:
            기록된 CarryPayment 또는 None
        """
        requested = to_decimal(amount)
        if requested <= 0 or self.carry_balance <= 0:
            return None

        applied = min(requested, self.carry_balance)
        if applied < requested:
            logger.info(
                f"납부 금액이 이월 잔액 초과, 잔액까지만 기록: account={self.account_number}, "
                f"requested={requested}, applied={applied}"
            )

        payment = CarryPayment(
            id=payment_id or generate_id(),
            amount=applied,
            date=now or now_iso(),
            note=note,
            week_id=week_id,
        )
        self.carry_payments.append(payment)
        self.carry_balance = max(ZERO, self.carry_balance - applied)
        return payment

    def pay_off_all(
        self,
        note: str = "",
        payment_id: str | None = None,
        now: str | None = None,
    ) -> CarryPayment | None:
        """이월 잔액 전액 납부 (잔액 0이면 None)"""
        if self.carry_balance <= 0:
            return None
        return self.record_payment(
            self.carry_balance,
            note or Defaults.PAID_IN_FULL_NOTE,
            payment_id=payment_id,
            now=now,
        )

    def remove_payment(self, payment_id: str) -> bool:
        """납부 기록 삭제 (undo) - 해당 금액을 잔액에 되돌림"""
        for idx, payment in enumerate(self.carry_payments):
            if payment.id == payment_id:
                self.carry_balance += payment.amount
                del self.carry_payments[idx]
                return True
        return False

    def get_payment(self, payment_id: str) -> CarryPayment | None:
        return next((p for p in self.carry_payments if p.id == payment_id), None)

    def payments_for_week(self, week_id: str) -> list[CarryPayment]:
        """특정 주간에 연결된 납부 목록"""
        return [p for p in self.carry_payments if p.week_id == week_id]

    # -------------------------------------------------------------------------
    # 직렬화
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "account_number": self.account_number,
            "carry_balance": to_json_number(self.carry_balance),
            "carry_payments": [p.to_dict() for p in self.carry_payments],
            "created": self.created,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerRecord:
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            account_number=int(data["account_number"]),
            carry_balance=max(ZERO, to_decimal(data.get("carry_balance") or 0)),
            carry_payments=[CarryPayment.from_dict(p) for p in data.get("carry_payments") or []],
            created=data.get("created") or now_iso(),
        )
