"""
주간 장부

한 정산 기간의 PlayerWeekRecord 집합과 파생 집계, 생명주기 상태 머신.

집계 필드는 멤버 레코드의 순수 함수이며 calculate_totals()로만 갱신된다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from core.domain.state_machines import StateMachineError, WeekStateMachine
from core.ledger.player_week import PlayerWeekRecord
from core.types import PaymentStatus, WeekStatus
from core.utils.ids import generate_id
from core.utils.money import ZERO, to_json_number
from core.utils.timezone import default_week_range, now_iso, validate_week_range

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CarryForwardLine:
    """다음 주로 넘어갈 이월 항목"""

    name: str
    account_number: int
    carry_amount: Decimal


@dataclass
class WeekLedger:
    """주간 장부

    상태 전이:
    - active → pending_close: start_close()
    - pending_close → active: cancel_close() (결제 상태 초기화)
    - active/pending_close → closed: finalize_close()
    - closed → active: reopen() (LedgerStore.reopen_week 전용)

    허용되지 않은 전이는 예외 없이 False 반환.
    """

    name: str = ""
    id: str = field(default_factory=generate_id)
    start: str = ""
    end: str = ""
    status: WeekStatus = WeekStatus.ACTIVE
    players: list[PlayerWeekRecord] = field(default_factory=list)

    # 집계 (calculate_totals 결과)
    in_total: Decimal = ZERO
    out_total: Decimal = ZERO
    vig: Decimal = ZERO
    result: Decimal = ZERO
    expected_in: Decimal = ZERO
    actual_collected: Decimal = ZERO
    total_carried_in: Decimal = ZERO
    total_carried_out: Decimal = ZERO

    closed_date: str | None = None
    previous_week_id: str | None = None
    next_week_id: str | None = None
    created: str = field(default_factory=now_iso)
    updated: str = field(default_factory=now_iso)

    def __post_init__(self) -> None:
        if not self.start or not self.end:
            start, end = default_week_range()
            self.start = self.start or start
            self.end = self.end or end

    # -------------------------------------------------------------------------
    # 상태 조회
    # -------------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.status == WeekStatus.ACTIVE

    @property
    def is_pending_close(self) -> bool:
        return self.status == WeekStatus.PENDING_CLOSE

    @property
    def is_closed(self) -> bool:
        return self.status == WeekStatus.CLOSED

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def players_in(self) -> list[PlayerWeekRecord]:
        return [p for p in self.players if p.is_in]

    @property
    def players_out(self) -> list[PlayerWeekRecord]:
        return [p for p in self.players if p.is_out]

    def players_with_status(self, status: PaymentStatus) -> list[PlayerWeekRecord]:
        return [p for p in self.players if p.payment_status == status]

    @property
    def players_paid(self) -> list[PlayerWeekRecord]:
        return self.players_with_status(PaymentStatus.PAID)

    @property
    def players_unpaid(self) -> list[PlayerWeekRecord]:
        return self.players_with_status(PaymentStatus.UNPAID)

    @property
    def players_partial(self) -> list[PlayerWeekRecord]:
        return self.players_with_status(PaymentStatus.PARTIAL)

    @property
    def players_pending(self) -> list[PlayerWeekRecord]:
        return self.players_with_status(PaymentStatus.PENDING)

    @property
    def collection_rate(self) -> Decimal:
        """수금률 (%) - 기대 수금액이 0이면 100"""
        if self.expected_in == 0:
            return Decimal("100")
        return self.actual_collected / self.expected_in * 100

    @property
    def uncollected(self) -> Decimal:
        return self.expected_in - self.actual_collected

    # -------------------------------------------------------------------------
    # 집계
    # -------------------------------------------------------------------------

    def _touch(self, now: str | None = None) -> None:
        self.updated = now or now_iso()

    def calculate_totals(self) -> None:
        """멤버 레코드로부터 모든 집계 재계산 (멱등)"""
        self.in_total = sum((p.amount for p in self.players if p.amount > 0), ZERO)
        self.out_total = sum((abs(p.amount) for p in self.players if p.amount < 0), ZERO)

        # vig: 이월되지 않은 in 금액의 15%
        self.vig = sum((p.vig for p in self.players), ZERO)

        self.result = self.in_total - self.out_total - self.vig

        # 이전 주에서 넘어온 이월
        self.total_carried_in = sum(
            (p.carry_amount for p in self.players if p.carried), ZERO
        )

        self.expected_in = self.in_total + self.total_carried_in

        self.actual_collected = sum(
            (
                p.paid_amount
                for p in self.players
                if p.payment_status in (PaymentStatus.PAID, PaymentStatus.PARTIAL)
            ),
            ZERO,
        )

        # 다음 주로 넘어갈 이월
        self.total_carried_out = sum((p.carry_forward for p in self.players), ZERO)

    # -------------------------------------------------------------------------
    # 멤버 관리
    # -------------------------------------------------------------------------

    def add_player(
        self,
        name: str,
        account_number: int,
        record_id: str | None = None,
        now: str | None = None,
    ) -> PlayerWeekRecord:
        """플레이어 레코드 추가"""
        now = now or now_iso()
        record = PlayerWeekRecord(
            name=name,
            account_number=account_number,
            id=record_id or generate_id(),
            created=now,
            updated=now,
        )
        self.players.append(record)
        self.calculate_totals()
        self._touch(now)
        return record

    def remove_player(self, record_id: str, now: str | None = None) -> bool:
        for idx, record in enumerate(self.players):
            if record.id == record_id:
                del self.players[idx]
                self.calculate_totals()
                self._touch(now)
                return True
        return False

    def get_player(self, record_id: str) -> PlayerWeekRecord | None:
        return next((p for p in self.players if p.id == record_id), None)

    def get_player_by_account(self, account_number: int) -> PlayerWeekRecord | None:
        return next((p for p in self.players if p.account_number == account_number), None)

    def mark_all_paid(self, now: str | None = None) -> None:
        """금액이 있는 모든 플레이어 정산 완료 처리 (in/out 모두)"""
        now = now or now_iso()
        for record in self.players:
            if record.amount != 0:
                record.mark_paid(now=now)
        self.calculate_totals()
        self._touch(now)

    def get_carry_forward_data(self) -> list[CarryForwardLine]:
        """다음 주 생성에 필요한 이월 항목"""
        return [
            CarryForwardLine(
                name=p.name,
                account_number=p.account_number,
                carry_amount=p.carry_forward,
            )
            for p in self.players
            if p.carry_forward != 0
        ]

    # -------------------------------------------------------------------------
    # 생명주기
    # -------------------------------------------------------------------------

    def _transition(self, target: WeekStatus, now: str | None) -> bool:
        machine = WeekStateMachine(self.status)
        try:
            machine.transition(target)
        except StateMachineError as e:
            logger.debug(f"주간 상태 전이 무시: week={self.id}, {e}")
            return False
        self.status = WeekStatus(machine.state)
        self._touch(now)
        return True

    def start_close(self, now: str | None = None) -> bool:
        """마감 검토 시작 (active → pending_close)"""
        return self._transition(WeekStatus.PENDING_CLOSE, now)

    def cancel_close(self, now: str | None = None) -> bool:
        """마감 검토 취소 (pending_close → active)

        진행 중이던 결제 상태 검토를 모두 폐기.
        """
        if not self.is_pending_close:
            logger.debug(f"마감 취소 무시: week={self.id}, status={self.status.value}")
            return False
        return self._reset_to_active(now)

    def finalize_close(self, now: str | None = None) -> bool:
        """마감 확정 (→ closed)"""
        now = now or now_iso()
        if not self._transition(WeekStatus.CLOSED, now):
            return False
        self.closed_date = now
        self.calculate_totals()
        return True

    def reopen(self, now: str | None = None) -> bool:
        """마감 해제 (closed → active)

        로스터 carry_balance 되돌리기는 호출자(LedgerStore) 책임.
        """
        if not self.is_closed:
            logger.debug(f"재오픈 무시: week={self.id}, status={self.status.value}")
            return False
        return self._reset_to_active(now)

    def _reset_to_active(self, now: str | None) -> bool:
        now = now or now_iso()
        if not self._transition(WeekStatus.ACTIVE, now):
            return False
        for record in self.players:
            record.reset_payment_status(now)
        self.closed_date = None
        self.calculate_totals()
        return True

    # -------------------------------------------------------------------------
    # 직렬화
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "players": [p.to_dict() for p in self.players],
            "start": self.start,
            "end": self.end,
            "in_total": to_json_number(self.in_total),
            "out_total": to_json_number(self.out_total),
            "result": to_json_number(self.result),
            "vig": to_json_number(self.vig),
            "status": self.status.value,
            "expected_in": to_json_number(self.expected_in),
            "actual_collected": to_json_number(self.actual_collected),
            "total_carried_in": to_json_number(self.total_carried_in),
            "total_carried_out": to_json_number(self.total_carried_out),
            "closed_date": self.closed_date,
            "previous_week_id": self.previous_week_id,
            "next_week_id": self.next_week_id,
            "created": self.created,
            "updated": self.updated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WeekLedger:
        """스냅샷 dict에서 복원

        status가 없는 구버전 데이터는 boolean active 필드로 판단.
        집계는 저장값 대신 멤버 레코드에서 다시 계산.

        Raises:
            ValueError: 상태값 또는 기간 형식이 잘못된 경우
        """
        validate_week_range(data["start"], data["end"])

        raw_status = data.get("status")
        if raw_status:
            status = WeekStatus(raw_status)
        else:
            status = WeekStatus.ACTIVE if data.get("active") else WeekStatus.CLOSED

        week = cls(
            id=data["id"],
            name=data.get("name") or "",
            start=data["start"],
            end=data["end"],
            status=status,
            players=[PlayerWeekRecord.from_dict(p) for p in data["players"]],
            closed_date=data.get("closed_date") or None,
            previous_week_id=data.get("previous_week_id") or None,
            next_week_id=data.get("next_week_id") or None,
            created=data.get("created") or now_iso(),
            updated=data.get("updated") or now_iso(),
        )
        week.calculate_totals()
        return week
