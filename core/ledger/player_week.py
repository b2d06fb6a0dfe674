"""
주간 플레이어 레코드

한 플레이어의 한 주 참여 기록: 스테이크, 이월 금액, 결제 상태.
파생 금액(vig, 총 청구액, 이월액)은 모두 현재 필드에서 계산된다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from core.constants import Defaults
from core.types import PaymentStatus
from core.utils.ids import generate_id
from core.utils.money import ZERO, Amount, to_decimal, to_json_number
from core.utils.timezone import now_iso

logger = logging.getLogger(__name__)


@dataclass
class PlayerWeekRecord:
    """주간 플레이어 레코드

    amount 부호 규칙:
    - 양수: 플레이어가 하우스에 지불 (in)
    - 음수: 하우스가 플레이어에게 지불 (out)

    account_number가 주간을 가로지르는 조인 키이며 id는 주간별 임시 식별자.
    """

    name: str = ""
    account_number: int = 0
    id: str = field(default_factory=generate_id)

    amount: Decimal = ZERO
    result: Decimal = ZERO  # 이번 주 승패만 (이월 제외)

    # 이전 주 미납 이월
    carried: bool = False
    carry_amount: Decimal = ZERO
    carry_from_week_id: str | None = None

    # 레코드 생성 시점의 로스터 누적 이월 잔액 (표시용 스냅샷)
    prior_carry_balance: Decimal = ZERO

    # 정산
    payment_status: PaymentStatus = PaymentStatus.PENDING
    paid_amount: Decimal = ZERO
    paid_date: str | None = None

    note: str = ""
    created: str = field(default_factory=now_iso)
    updated: str = field(default_factory=now_iso)

    # -------------------------------------------------------------------------
    # 파생 값
    # -------------------------------------------------------------------------

    @property
    def is_in(self) -> bool:
        return self.amount > 0

    @property
    def is_out(self) -> bool:
        return self.amount < 0

    @property
    def absolute_amount(self) -> Decimal:
        return abs(self.amount)

    @property
    def player_result(self) -> Decimal:
        """플레이어 관점 결과 (부호 반전)"""
        return -self.result

    @property
    def vig(self) -> Decimal:
        """하우스 커미션

        이월 레코드는 원래 주간에서 이미 vig가 반영되었으므로 제외.
        """
        if self.amount > 0 and not self.carried:
            return self.amount * Defaults.VIG_RATE
        return ZERO

    @property
    def total_owed(self) -> Decimal:
        """마감 시 수금 대상 금액 (이번 주 금액 + 이월)"""
        carry = self.carry_amount if self.carried else ZERO
        return max(ZERO, self.amount + carry)

    @property
    def accumulated_owed(self) -> Decimal:
        """이번 주 청구액 + 로스터 누적 이월 잔액"""
        this_week = self.amount if self.amount > 0 else ZERO
        return this_week + self.prior_carry_balance

    @property
    def outstanding_balance(self) -> Decimal:
        """결제 후 남은 금액 (0 미만으로 내려가지 않음)"""
        if self.payment_status == PaymentStatus.PAID:
            return ZERO
        if self.payment_status == PaymentStatus.PARTIAL:
            return max(ZERO, self.total_owed - self.paid_amount)
        # pending / unpaid
        return self.total_owed

    @property
    def overpayment(self) -> Decimal:
        """청구액을 초과해 받은 금액"""
        if self.payment_status in (PaymentStatus.PAID, PaymentStatus.PARTIAL):
            return max(ZERO, self.paid_amount - self.total_owed)
        return ZERO

    @property
    def carry_forward(self) -> Decimal:
        """다음 주/로스터로 넘어갈 금액

        paid, pending → 0
        unpaid → total_owed 전액
        partial → total_owed - paid_amount (0 이상)
        """
        if self.payment_status in (PaymentStatus.PAID, PaymentStatus.PENDING):
            return ZERO

        owed = self.total_owed
        if owed <= 0:
            return ZERO

        if self.payment_status == PaymentStatus.PARTIAL:
            return max(ZERO, owed - self.paid_amount)

        return owed

    # -------------------------------------------------------------------------
    # 스테이크 입력
    # -------------------------------------------------------------------------

    def _touch(self, now: str | None = None) -> None:
        self.updated = now or now_iso()

    def _calculate_result(self) -> None:
        # 결과는 이번 주 승패만 (이월은 별도 추적)
        self.result = self.amount

    def set_amount(self, amount: Amount, now: str | None = None) -> None:
        """부호 포함 금액 직접 설정"""
        self.amount = to_decimal(amount)
        self._calculate_result()
        self._touch(now)

    def set_in(self, amount: Amount, now: str | None = None) -> None:
        """플레이어가 지불할 금액 (양수로 고정)"""
        self.set_amount(abs(to_decimal(amount)), now)

    def set_out(self, amount: Amount, now: str | None = None) -> None:
        """하우스가 지불할 금액 (음수로 고정)"""
        self.set_amount(-abs(to_decimal(amount)), now)

    def carry_over(
        self,
        amount: Amount,
        from_week_id: str | None = None,
        now: str | None = None,
    ) -> None:
        """이전 주 이월 금액으로 시드"""
        self.carried = True
        self.carry_amount = to_decimal(amount)
        self.carry_from_week_id = from_week_id
        self._calculate_result()
        self._touch(now)

    def clear_carry(self, now: str | None = None) -> None:
        """이월 시드 제거"""
        self.carried = False
        self.carry_amount = ZERO
        self.carry_from_week_id = None
        self._calculate_result()
        self._touch(now)

    def rename(self, name: str, now: str | None = None) -> None:
        self.name = name
        self._touch(now)

    def set_note(self, note: str, now: str | None = None) -> None:
        self.note = note
        self._touch(now)

    # -------------------------------------------------------------------------
    # 결제 상태 전이 (값으로 거부하지 않음)
    # -------------------------------------------------------------------------

    def mark_paid(self, amount: Amount | None = None, now: str | None = None) -> None:
        """완납 처리 (금액 생략 시 total_owed 전액)"""
        now = now or now_iso()
        self.payment_status = PaymentStatus.PAID
        self.paid_amount = self.total_owed if amount is None else to_decimal(amount)
        self.paid_date = now
        self._touch(now)

    def mark_unpaid(self, now: str | None = None) -> None:
        """미납 처리"""
        self.payment_status = PaymentStatus.UNPAID
        self.paid_amount = ZERO
        self.paid_date = None
        self._touch(now)

    def mark_partial(self, paid_amount: Amount, now: str | None = None) -> None:
        """부분 납부 처리

        total_owed 초과 금액도 그대로 기록 (overpayment로 노출).
        """
        now = now or now_iso()
        self.payment_status = PaymentStatus.PARTIAL
        self.paid_amount = to_decimal(paid_amount)
        self.paid_date = now
        self._touch(now)

        if self.paid_amount > self.total_owed:
            logger.info(
                f"부분 납부 금액이 청구액 초과: account={self.account_number}, "
                f"paid={self.paid_amount}, owed={self.total_owed}"
            )

    def reset_payment_status(self, now: str | None = None) -> None:
        """검토 전 상태로 초기화"""
        self.payment_status = PaymentStatus.PENDING
        self.paid_amount = ZERO
        self.paid_date = None
        self._touch(now)

    # -------------------------------------------------------------------------
    # 직렬화
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "account_number": self.account_number,
            "amount": to_json_number(self.amount),
            "carried": self.carried,
            "carry_amount": to_json_number(self.carry_amount),
            "carry_from_week_id": self.carry_from_week_id,
            "prior_carry_balance": to_json_number(self.prior_carry_balance),
            "result": to_json_number(self.result),
            "payment_status": self.payment_status.value,
            "paid_amount": to_json_number(self.paid_amount),
            "paid_date": self.paid_date,
            "note": self.note,
            "created": self.created,
            "updated": self.updated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerWeekRecord:
        """스냅샷 dict에서 복원

        누락된 결제/이월 필드는 기본값으로 보정 (구버전 데이터 호환).

        Raises:
            KeyError, TypeError, ValueError, decimal.InvalidOperation: 형식 오류
        """
        amount = to_decimal(data["amount"])
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            account_number=int(data["account_number"]),
            amount=amount,
            result=to_decimal(data.get("result", amount)),
            carried=bool(data.get("carried", False)),
            carry_amount=to_decimal(data.get("carry_amount") or 0),
            carry_from_week_id=data.get("carry_from_week_id") or None,
            prior_carry_balance=to_decimal(data.get("prior_carry_balance") or 0),
            payment_status=PaymentStatus(data.get("payment_status") or PaymentStatus.PENDING.value),
            paid_amount=to_decimal(data.get("paid_amount") or 0),
            paid_date=data.get("paid_date") or None,
            note=data.get("note") or "",
            created=data.get("created") or now_iso(),
            updated=data.get("updated") or now_iso(),
        )
