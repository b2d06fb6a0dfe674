"""
core/ledger/player_week.py 테스트

PlayerWeekRecord 파생 금액 (vig, total_owed, carry_forward) 및 결제 상태 전이
"""

from decimal import Decimal

import pytest

from core.ledger.player_week import PlayerWeekRecord
from core.types import PaymentStatus


def make_record(amount: int | str = 0, **kwargs) -> PlayerWeekRecord:
    record = PlayerWeekRecord(name="Alice", account_number=7, id="rec-1", **kwargs)
    record.set_amount(amount)
    return record


class TestStakes:
    """스테이크 입력"""

    def test_set_in_forces_positive(self) -> None:
        record = make_record()
        record.set_in(-100)

        assert record.amount == Decimal("100")
        assert record.is_in
        assert record.result == Decimal("100")

    def test_set_out_forces_negative(self) -> None:
        record = make_record()
        record.set_out(60)

        assert record.amount == Decimal("-60")
        assert record.is_out
        assert record.absolute_amount == Decimal("60")
        assert record.player_result == Decimal("60")

    def test_result_excludes_carry(self) -> None:
        record = make_record(30)
        record.carry_over(40, "week-0")

        assert record.result == Decimal("30")
        assert record.carried
        assert record.carry_from_week_id == "week-0"

    def test_clear_carry(self) -> None:
        record = make_record()
        record.carry_over(40, "week-0")
        record.clear_carry()

        assert not record.carried
        assert record.carry_amount == 0
        assert record.carry_from_week_id is None

    def test_timestamp_injection(self) -> None:
        record = make_record()
        record.set_note("late", now="2026-01-01T00:00:00.000Z")

        assert record.note == "late"
        assert record.updated == "2026-01-01T00:00:00.000Z"


class TestVig:
    """하우스 커미션"""

    def test_vig_on_positive_stake(self) -> None:
        assert make_record(100).vig == Decimal("15")

    def test_no_vig_on_negative_stake(self) -> None:
        assert make_record(-100).vig == 0

    def test_no_vig_on_carried_record(self) -> None:
        record = make_record(100)
        record.carry_over(40)

        assert record.vig == 0

    def test_decimal_precision(self) -> None:
        assert make_record("33.33").vig == Decimal("4.9995")


class TestTotalOwed:
    """청구액"""

    def test_includes_carry(self) -> None:
        record = make_record(50)
        record.carry_over(40)

        assert record.total_owed == Decimal("90")

    def test_clamped_at_zero(self) -> None:
        record = make_record(-100)
        record.carry_over(40)

        assert record.total_owed == 0

    def test_accumulated_owed_adds_prior_balance(self) -> None:
        record = make_record(50, prior_carry_balance=Decimal("25"))

        assert record.accumulated_owed == Decimal("75")

    def test_accumulated_owed_ignores_negative_stake(self) -> None:
        record = make_record(-50, prior_carry_balance=Decimal("25"))

        assert record.accumulated_owed == Decimal("25")


class TestCarryForward:
    """결제 상태별 이월액"""

    def test_pending_carries_nothing(self) -> None:
        assert make_record(50).carry_forward == 0

    def test_unpaid_partial_paid_sequence(self) -> None:
        """unpaid 50 → partial(20) 30 → paid 0"""
        record = make_record(50)

        record.mark_unpaid()
        assert record.carry_forward == Decimal("50")
        assert record.carry_forward == record.total_owed

        record.mark_partial(20)
        assert record.carry_forward == Decimal("30")
        assert record.outstanding_balance == Decimal("30")

        record.mark_paid()
        assert record.carry_forward == 0
        assert record.paid_amount == Decimal("50")

    def test_unpaid_negative_stake_carries_nothing(self) -> None:
        record = make_record(-80)
        record.mark_unpaid()

        assert record.carry_forward == 0

    def test_overpayment_is_clamped(self) -> None:
        record = make_record(50)
        record.mark_partial(70)

        assert record.carry_forward == 0
        assert record.outstanding_balance == 0
        assert record.overpayment == Decimal("20")

    def test_mark_paid_with_explicit_amount(self) -> None:
        record = make_record(50)
        record.mark_paid(45)

        assert record.paid_amount == Decimal("45")
        assert record.outstanding_balance == 0


class TestPaymentStatus:
    """결제 상태 전이"""

    def test_mark_paid_sets_date(self) -> None:
        record = make_record(50)
        record.mark_paid(now="2026-03-01T00:00:00.000Z")

        assert record.payment_status == PaymentStatus.PAID
        assert record.paid_date == "2026-03-01T00:00:00.000Z"

    def test_mark_unpaid_clears_payment(self) -> None:
        record = make_record(50)
        record.mark_paid()
        record.mark_unpaid()

        assert record.payment_status == PaymentStatus.UNPAID
        assert record.paid_amount == 0
        assert record.paid_date is None

    def test_reset(self) -> None:
        record = make_record(50)
        record.mark_partial(10)
        record.reset_payment_status()

        assert record.payment_status == PaymentStatus.PENDING
        assert record.paid_amount == 0
        assert record.paid_date is None


class TestSerialization:
    """스냅샷 dict 변환"""

    def test_round_trip(self) -> None:
        record = make_record("12.5", prior_carry_balance=Decimal("10"))
        record.carry_over(40, "week-0")
        record.mark_partial(20)

        restored = PlayerWeekRecord.from_dict(record.to_dict())

        assert restored == record

    def test_numbers_are_json_numbers(self) -> None:
        data = make_record("12.5").to_dict()

        assert data["amount"] == 12.5
        assert data["carry_amount"] == 0
        assert isinstance(data["carry_amount"], int)

    def test_legacy_defaults(self) -> None:
        record = PlayerWeekRecord.from_dict({"id": "r", "name": "Bob", "account_number": 3, "amount": 20})

        assert record.payment_status == PaymentStatus.PENDING
        assert record.carried is False
        assert record.result == Decimal("20")
        assert record.prior_carry_balance == 0

    def test_invalid_status_raises(self) -> None:
        with pytest.raises(ValueError):
            PlayerWeekRecord.from_dict(
                {"id": "r", "account_number": 3, "amount": 20, "payment_status": "bogus"}
            )
