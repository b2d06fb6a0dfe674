"""
Ledger 저장소

로스터(PlayerRecord)와 주간 장부(WeekLedger) 전체를 소유하는 최상위 집합체.

- 주간 마감/재오픈 시 로스터 carry_balance 갱신/복원
- 마감 주간의 이월을 다음 주간 레코드로 시드
- 모든 변경 후 로컬 스냅샷 저장 + 클라우드 동기화 예약
"""

from __future__ import annotations

import json
import logging
from decimal import InvalidOperation
from typing import Any, Callable

from adapters.interfaces import IClock, IIdGenerator, IKeyValueStore
from adapters.models import NOT_CONFIGURED_ERROR, RemoteResult
from core.constants import SNAPSHOT_VERSION, StorageKeys
from core.ledger.player import CarryPayment, PlayerRecord
from core.ledger.player_week import PlayerWeekRecord
from core.ledger.types import (
    PlayerCarryBreakdown,
    RunningBalance,
    WeekBalanceLine,
    WeekCarryLine,
)
from core.ledger.week import WeekLedger
from core.sync.cloud_sync import CloudSync
from core.types import PaymentStatus, SyncState
from core.utils.ids import UuidGenerator
from core.utils.money import ZERO, Amount
from core.utils.timezone import (
    SystemClock,
    default_week_range,
    next_week_range,
    validate_week_range,
)

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]

# 스냅샷 파싱 중 발생 가능한 형식 오류
SNAPSHOT_ERRORS = (
    json.JSONDecodeError,
    KeyError,
    TypeError,
    ValueError,
    AttributeError,
    InvalidOperation,
)


class LedgerStore:
    """Ledger 저장소

    단일 편집자 전제. 모든 변경은 동기적으로 끝까지 실행되며
    변경 직후 로컬 key/value 저장소에 전체 스냅샷을 저장한다.

    Args:
        kv: 로컬 key/value 저장소
        cloud: 클라우드 동기화 (None이면 로컬 전용)
        ids: ID 생성기
        clock: 시계

    사용 예시:
    ```python
    store = LedgerStore(SQLiteKeyValueStore(db_path), cloud=CloudSync(client))
    store.init()

    week = store.create_week("Week 1")
    alice = store.add_player("Alice", 7)
    record = store.add_roster_player_to_week(week.id, alice.id)
    store.set_player_in(week.id, record.id, 100)

    store.start_close(week.id)
    store.mark_player_unpaid(week.id, record.id)
    store.close_week_and_update_carries(week.id)
    next_week = store.create_next_week_from_closed(week.id)
    ```
    """

    def __init__(
        self,
        kv: IKeyValueStore,
        cloud: CloudSync | None = None,
        ids: IIdGenerator | None = None,
        clock: IClock | None = None,
    ):
        self.kv = kv
        self.cloud = cloud
        self.ids = ids or UuidGenerator()
        self.clock = clock or SystemClock()

        self._weeks: list[WeekLedger] = []
        self._players: list[PlayerRecord] = []
        self._active_week_id: str | None = None
        self._initialized = False
        self._listeners: list[ChangeListener] = []

    # =========================================================================
    # 조회
    # =========================================================================

    @property
    def weeks(self) -> list[WeekLedger]:
        return list(self._weeks)

    @property
    def players(self) -> list[PlayerRecord]:
        return list(self._players)

    @property
    def active_week_id(self) -> str | None:
        return self._active_week_id

    @property
    def active_week(self) -> WeekLedger | None:
        if self._active_week_id is None:
            return None
        return self.get_week(self._active_week_id)

    @property
    def open_weeks(self) -> list[WeekLedger]:
        """마감되지 않은 주간 (active, pending_close)"""
        return [w for w in self._weeks if not w.is_closed]

    @property
    def closed_weeks(self) -> list[WeekLedger]:
        return [w for w in self._weeks if w.is_closed]

    @property
    def week_count(self) -> int:
        return len(self._weeks)

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def sync_state(self) -> SyncState:
        return self.cloud.state if self.cloud else SyncState.IDLE

    # =========================================================================
    # 초기화 / 변경 알림
    # =========================================================================

    def init(self) -> None:
        """로컬 스냅샷 로드 + 이월 잔액 마이그레이션 (1회)"""
        if self._initialized:
            return
        self.load()
        self.migrate_carry_balances()
        self._initialized = True

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """변경 알림 구독

        Returns:
            구독 해제 함수
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _now(self) -> str:
        return self.clock.now()

    def _commit(self) -> None:
        """로컬 저장 + 구독자 알림 + 클라우드 push 예약"""
        self.save()
        for listener in list(self._listeners):
            listener()
        if self.cloud is not None:
            self.cloud.schedule_push(self.to_snapshot)

    # =========================================================================
    # 로스터
    # =========================================================================

    def add_player(self, name: str, account_number: int) -> PlayerRecord | None:
        """로스터 플레이어 추가 (계좌번호 중복이면 None)"""
        if self.get_player_by_account(account_number) is not None:
            logger.info(f"로스터 계좌번호 중복으로 추가 거부: account={account_number}")
            return None

        player = PlayerRecord(
            name=name,
            account_number=account_number,
            id=self.ids.new_id(),
            created=self._now(),
        )
        self._players.append(player)
        self._commit()
        return player

    def remove_player(self, player_id: str) -> bool:
        """로스터 플레이어 삭제

        과거 주간 레코드는 그대로 남음 (계좌번호 참조가 끊긴 채로).
        """
        for idx, player in enumerate(self._players):
            if player.id == player_id:
                del self._players[idx]
                self._commit()
                return True
        return False

    def rename_player(self, player_id: str, name: str) -> PlayerRecord | None:
        player = self.get_player(player_id)
        if player is None:
            return None
        player.name = name
        self._commit()
        return player

    def get_player(self, player_id: str) -> PlayerRecord | None:
        return next((p for p in self._players if p.id == player_id), None)

    def get_player_by_account(self, account_number: int) -> PlayerRecord | None:
        return next((p for p in self._players if p.account_number == account_number), None)

    # =========================================================================
    # 주간 관리
    # =========================================================================

    def _new_week(self, name: str, start: str | None = None, end: str | None = None) -> WeekLedger:
        if start is None or end is None:
            default_start, default_end = default_week_range()
            start = start or default_start
            end = end or default_end
        now = self._now()
        return WeekLedger(
            name=name,
            id=self.ids.new_id(),
            start=start,
            end=end,
            created=now,
            updated=now,
        )

    def create_week(
        self, name: str, start: str | None = None, end: str | None = None
    ) -> WeekLedger | None:
        """빈 주간 생성 (기본 기간: 지금부터 7일)

        start/end가 ISO-8601이 아니거나 end <= start이면 None.
        """
        week = self._new_week(name, start, end)
        try:
            validate_week_range(week.start, week.end)
        except ValueError as e:
            logger.debug(f"주간 생성 거부: {e}")
            return None
        self._weeks.append(week)
        self._commit()
        return week

    def delete_week(self, week_id: str) -> bool:
        """주간 삭제 (이전/다음 주간 링크도 해제)"""
        week = self.get_week(week_id)
        if week is None:
            return False

        self._weeks.remove(week)
        for other in self._weeks:
            if other.next_week_id == week_id:
                other.next_week_id = None
            if other.previous_week_id == week_id:
                other.previous_week_id = None
        if self._active_week_id == week_id:
            self._active_week_id = None

        self._commit()
        return True

    def get_week(self, week_id: str) -> WeekLedger | None:
        return next((w for w in self._weeks if w.id == week_id), None)

    def set_active_week(self, week_id: str | None) -> bool:
        """활성 주간 포인터 설정 (존재하지 않는 ID면 무시)"""
        if week_id is not None and self.get_week(week_id) is None:
            return False
        self._active_week_id = week_id
        self._commit()
        return True

    # =========================================================================
    # 주간 멤버
    # =========================================================================

    def _editable_week(self, week_id: str) -> WeekLedger | None:
        week = self.get_week(week_id)
        if week is None:
            return None
        if not week.is_active:
            logger.debug(f"active 상태가 아닌 주간 편집 무시: week={week_id}, status={week.status.value}")
            return None
        return week

    def add_week_player(self, week_id: str, name: str, account_number: int) -> PlayerWeekRecord | None:
        """주간에 플레이어 레코드 추가

        로스터에 같은 계좌번호가 있으면 현재 carry_balance를 스냅샷.
        """
        week = self._editable_week(week_id)
        if week is None:
            return None
        if week.get_player_by_account(account_number) is not None:
            logger.debug(f"이미 주간에 있는 계좌번호: week={week_id}, account={account_number}")
            return None

        record = week.add_player(name, account_number, record_id=self.ids.new_id(), now=self._now())
        roster_player = self.get_player_by_account(account_number)
        if roster_player is not None:
            record.prior_carry_balance = roster_player.carry_balance

        self._commit()
        return record

    def add_roster_player_to_week(self, week_id: str, player_id: str) -> PlayerWeekRecord | None:
        """로스터 플레이어를 주간에 복사"""
        player = self.get_player(player_id)
        if player is None:
            return None
        return self.add_week_player(week_id, player.name, player.account_number)

    def populate_week_from_roster(self, week_id: str) -> list[PlayerWeekRecord]:
        """주간에 없는 로스터 플레이어 전원 추가"""
        week = self._editable_week(week_id)
        if week is None:
            return []

        now = self._now()
        added: list[PlayerWeekRecord] = []
        for player in self._players:
            if week.get_player_by_account(player.account_number) is not None:
                continue
            record = week.add_player(player.name, player.account_number, record_id=self.ids.new_id(), now=now)
            record.prior_carry_balance = player.carry_balance
            added.append(record)

        if added:
            self._commit()
        return added

    def remove_week_player(self, week_id: str, record_id: str) -> bool:
        week = self._editable_week(week_id)
        if week is None:
            return False
        if not week.remove_player(record_id, now=self._now()):
            return False
        self._commit()
        return True

    # =========================================================================
    # 스테이크 입력 (active 주간)
    # =========================================================================

    def _editable_record(self, week_id: str, record_id: str) -> tuple[WeekLedger, PlayerWeekRecord] | None:
        week = self._editable_week(week_id)
        if week is None:
            return None
        record = week.get_player(record_id)
        if record is None:
            return None
        return week, record

    def set_player_in(self, week_id: str, record_id: str, amount: Amount) -> PlayerWeekRecord | None:
        """플레이어가 낼 금액 입력 (양수)"""
        found = self._editable_record(week_id, record_id)
        if found is None:
            return None
        week, record = found
        record.set_in(amount, now=self._now())
        week.calculate_totals()
        self._commit()
        return record

    def set_player_out(self, week_id: str, record_id: str, amount: Amount) -> PlayerWeekRecord | None:
        """하우스가 줄 금액 입력 (음수)"""
        found = self._editable_record(week_id, record_id)
        if found is None:
            return None
        week, record = found
        record.set_out(amount, now=self._now())
        week.calculate_totals()
        self._commit()
        return record

    def set_player_note(self, week_id: str, record_id: str, note: str) -> PlayerWeekRecord | None:
        week = self.get_week(week_id)
        if week is None or week.is_closed:
            return None
        record = week.get_player(record_id)
        if record is None:
            return None
        record.set_note(note, now=self._now())
        self._commit()
        return record

    # =========================================================================
    # 마감 검토 (pending_close 주간)
    # =========================================================================

    def start_close(self, week_id: str) -> bool:
        week = self.get_week(week_id)
        if week is None or not week.start_close(now=self._now()):
            return False
        self._commit()
        return True

    def cancel_close(self, week_id: str) -> bool:
        week = self.get_week(week_id)
        if week is None or not week.cancel_close(now=self._now()):
            return False
        self._commit()
        return True

    def _reviewable_record(self, week_id: str, record_id: str) -> tuple[WeekLedger, PlayerWeekRecord] | None:
        week = self.get_week(week_id)
        if week is None:
            return None
        if not week.is_pending_close:
            logger.debug(f"검토 단계가 아닌 주간의 결제 상태 변경 무시: week={week_id}")
            return None
        record = week.get_player(record_id)
        if record is None:
            return None
        return week, record

    def mark_player_paid(
        self,
        week_id: str,
        record_id: str,
        amount: Amount | None = None,
    ) -> PlayerWeekRecord | None:
        found = self._reviewable_record(week_id, record_id)
        if found is None:
            return None
        week, record = found
        record.mark_paid(amount, now=self._now())
        week.calculate_totals()
        self._commit()
        return record

    def mark_player_unpaid(self, week_id: str, record_id: str) -> PlayerWeekRecord | None:
        found = self._reviewable_record(week_id, record_id)
        if found is None:
            return None
        week, record = found
        record.mark_unpaid(now=self._now())
        week.calculate_totals()
        self._commit()
        return record

    def mark_player_partial(
        self,
        week_id: str,
        record_id: str,
        paid_amount: Amount,
    ) -> PlayerWeekRecord | None:
        found = self._reviewable_record(week_id, record_id)
        if found is None:
            return None
        week, record = found
        record.mark_partial(paid_amount, now=self._now())
        week.calculate_totals()
        self._commit()
        return record

    def reset_player_payment(self, week_id: str, record_id: str) -> PlayerWeekRecord | None:
        found = self._reviewable_record(week_id, record_id)
        if found is None:
            return None
        week, record = found
        record.reset_payment_status(now=self._now())
        week.calculate_totals()
        self._commit()
        return record

    def mark_all_paid(self, week_id: str) -> bool:
        week = self.get_week(week_id)
        if week is None or not week.is_pending_close:
            return False
        week.mark_all_paid(now=self._now())
        self._commit()
        return True

    # =========================================================================
    # 마감 / 재오픈 (로스터 이월 연동)
    # =========================================================================

    def close_week_and_update_carries(self, week_id: str) -> bool:
        """주간 마감 + 로스터 carry_balance 반영

        1. 검토되지 않은 이월 레코드(pending + carried)는 unpaid로 강제
        2. carry_forward > 0인 레코드마다 같은 계좌번호의 로스터 플레이어에 add_carry
           (로스터에 없으면 건너뜀 - 마감 주간 레코드에는 남음)
        3. finalize_close
        """
        week = self.get_week(week_id)
        if week is None or week.is_closed:
            return False

        now = self._now()

        # 결제 상태 확정이 carry_forward 계산보다 먼저
        for record in week.players:
            if record.payment_status == PaymentStatus.PENDING and record.carried:
                record.mark_unpaid(now=now)
        week.calculate_totals()

        total_carried = ZERO
        for record in week.players:
            carry = record.carry_forward
            if carry <= 0:
                continue
            player = self.get_player_by_account(record.account_number)
            if player is None:
                logger.warning(
                    f"로스터에 없는 계좌번호, 이월 반영 생략: week={week.id}, "
                    f"account={record.account_number}, carry={carry}"
                )
                continue
            player.add_carry(carry)
            total_carried += carry

        week.finalize_close(now=now)
        self._commit()

        logger.info(f"주간 마감: week={week.name}, 로스터 이월 합계={total_carried}")
        return True

    def reopen_week(self, week_id: str) -> bool:
        """마감 주간 재오픈

        로스터 carry_balance 되돌리기가 결제 상태 초기화보다 먼저
        (carry_forward가 결제 상태에 의존).
        """
        week = self.get_week(week_id)
        if week is None or not week.is_closed:
            return False

        total_removed = ZERO
        for record in week.players:
            carry = record.carry_forward
            if carry <= 0:
                continue
            player = self.get_player_by_account(record.account_number)
            if player is None:
                continue
            player.remove_carry(carry)
            total_removed += carry

        week.reopen(now=self._now())
        self._commit()

        logger.info(f"주간 재오픈: week={week.name}, 로스터 이월 차감 합계={total_removed}")
        return True

    def create_next_week_from_closed(self, closed_week_id: str) -> WeekLedger | None:
        """마감 주간의 이월로 다음 주간 생성

        - 이름: "Week N" (N = 현재 주간 수 + 1)
        - 기간: 이전 주간 종료 다음 날 고정 시각부터 7일
        - carry_forward != 0인 레코드마다 이월 시드 + 로스터 현재 잔액 스냅샷
        - 생성된 주간을 활성 주간으로 설정
        """
        closed_week = self.get_week(closed_week_id)
        if closed_week is None or not closed_week.is_closed:
            return None

        try:
            start, end = next_week_range(closed_week.end)
        except ValueError:
            logger.warning(
                f"마감 주간 종료일 형식 오류: week={closed_week.id}, end={closed_week.end!r}"
            )
            return None
        new_week = self._new_week(f"Week {len(self._weeks) + 1}", start, end)

        new_week.previous_week_id = closed_week.id
        closed_week.next_week_id = new_week.id

        now = self._now()
        for line in closed_week.get_carry_forward_data():
            record = new_week.add_player(
                line.name,
                line.account_number,
                record_id=self.ids.new_id(),
                now=now,
            )
            record.carry_over(line.carry_amount, closed_week.id, now=now)

            roster_player = self.get_player_by_account(line.account_number)
            record.prior_carry_balance = roster_player.carry_balance if roster_player else ZERO

        new_week.calculate_totals()
        self._weeks.append(new_week)
        self._active_week_id = new_week.id
        self._commit()

        logger.info(
            f"다음 주간 생성: {new_week.name} (from {closed_week.name}), "
            f"이월 플레이어 {new_week.player_count}명"
        )
        return new_week

    def duplicate_week(self, week_id: str, new_name: str) -> WeekLedger | None:
        """주간 복제 (스테이크 0, 결과가 있던 플레이어는 그 결과를 이월로 시드)

        carry_forward가 아니라 원래 result 값을 그대로 이월.
        """
        source = self.get_week(week_id)
        if source is None:
            return None

        new_week = self._new_week(new_name)
        now = self._now()
        for player in source.players:
            record = new_week.add_player(
                player.name,
                player.account_number,
                record_id=self.ids.new_id(),
                now=now,
            )
            if player.result != 0:
                record.carry_over(player.result, source.id, now=now)

        new_week.calculate_totals()
        self._weeks.append(new_week)
        self._commit()
        return new_week

    # =========================================================================
    # 이월 잔액 납부
    # =========================================================================

    def record_carry_payment(
        self,
        account_number: int,
        amount: Amount,
        note: str = "",
    ) -> CarryPayment | None:
        """총 이월 잔액 대상 일시 납부"""
        player = self.get_player_by_account(account_number)
        if player is None:
            return None
        payment = player.record_payment(amount, note, payment_id=self.ids.new_id(), now=self._now())
        if payment is not None:
            self._commit()
        return payment

    def record_week_carry_payment(
        self,
        account_number: int,
        week_id: str,
        amount: Amount,
        note: str = "",
    ) -> CarryPayment | None:
        """특정 주간 이월분 납부"""
        player = self.get_player_by_account(account_number)
        if player is None or self.get_week(week_id) is None:
            return None
        payment = player.record_payment(
            amount,
            note,
            week_id=week_id,
            payment_id=self.ids.new_id(),
            now=self._now(),
        )
        if payment is not None:
            self._commit()
        return payment

    def pay_off_all_carry(self, account_number: int, note: str = "") -> CarryPayment | None:
        """이월 잔액 전액 납부"""
        player = self.get_player_by_account(account_number)
        if player is None:
            return None
        payment = player.pay_off_all(note, payment_id=self.ids.new_id(), now=self._now())
        if payment is not None:
            self._commit()
        return payment

    def undo_carry_payment(self, account_number: int, payment_id: str) -> bool:
        """납부 기록 취소 (금액을 잔액에 되돌림)"""
        player = self.get_player_by_account(account_number)
        if player is None:
            return False
        if not player.remove_payment(payment_id):
            return False
        self._commit()
        return True

    # =========================================================================
    # 읽기 전용 집계
    # =========================================================================

    def get_running_balance(self) -> RunningBalance:
        """마감 주간 전체의 기대/실제 수금 합계"""
        total_expected = ZERO
        total_collected = ZERO
        breakdown: list[WeekBalanceLine] = []

        for week in self.closed_weeks:
            total_expected += week.expected_in
            total_collected += week.actual_collected
            breakdown.append(
                WeekBalanceLine(
                    week_id=week.id,
                    week_name=week.name,
                    expected=week.expected_in,
                    collected=week.actual_collected,
                    outstanding=week.uncollected,
                )
            )

        return RunningBalance(
            total_expected=total_expected,
            total_collected=total_collected,
            total_outstanding=total_expected - total_collected,
            weekly_breakdown=breakdown,
        )

    def get_player_carry_breakdown(self, account_number: int) -> PlayerCarryBreakdown | None:
        """플레이어 이월 잔액의 주간별 구성"""
        player = self.get_player_by_account(account_number)
        if player is None:
            return None

        lines: list[WeekCarryLine] = []
        for week in self.closed_weeks:
            carry = sum(
                (r.carry_forward for r in week.players if r.account_number == account_number),
                ZERO,
            )
            if carry <= 0:
                continue
            paid = sum((p.amount for p in player.payments_for_week(week.id)), ZERO)
            lines.append(
                WeekCarryLine(
                    week_id=week.id,
                    week_name=week.name,
                    closed_date=week.closed_date,
                    carry_amount=carry,
                    paid=paid,
                    remaining=max(ZERO, carry - paid),
                )
            )

        return PlayerCarryBreakdown(
            player_id=player.id,
            name=player.name,
            account_number=player.account_number,
            carry_balance=player.carry_balance,
            total_paid=player.total_paid,
            weeks=lines,
            lump_sum_payments=[p for p in player.carry_payments if p.week_id is None],
        )

    # =========================================================================
    # 마이그레이션
    # =========================================================================

    def migrate_carry_balances(self) -> int:
        """이월 추적 이전 데이터의 로스터 잔액 백필

        로스터 중 누구라도 잔액이나 납부 이력이 있으면 건너뜀.

        Returns:
            잔액이 갱신된 레코드 수
        """
        if not self._players:
            return 0
        if any(p.carry_balance != 0 or p.carry_payments for p in self._players):
            return 0

        migrated = 0
        for week in self.closed_weeks:
            for record in week.players:
                carry = record.carry_forward
                if carry <= 0:
                    continue
                player = self.get_player_by_account(record.account_number)
                if player is None:
                    continue
                player.add_carry(carry)
                migrated += 1

        if migrated:
            logger.info(f"이월 잔액 마이그레이션: {migrated}건 반영")
            self.save()
        return migrated

    # =========================================================================
    # 스냅샷 / 영속화
    # =========================================================================

    def to_snapshot(self) -> dict[str, Any]:
        """전체 상태 스냅샷 (로컬/클라우드 공통 형식)"""
        return {
            "weeks": [w.to_dict() for w in self._weeks],
            "players": [p.to_dict() for p in self._players],
            "activeWeekId": self._active_week_id,
            "version": SNAPSHOT_VERSION,
        }

    def _apply_snapshot(self, data: Any) -> bool:
        """스냅샷으로 상태 전체 교체

        모든 객체를 먼저 만든 뒤 교체하므로 실패 시 기존 상태 유지.
        """
        try:
            if not isinstance(data, dict):
                raise TypeError(f"스냅샷은 객체여야 합니다: {type(data).__name__}")

            weeks = [WeekLedger.from_dict(w) for w in data["weeks"]]
            players = [PlayerRecord.from_dict(p) for p in data.get("players") or []]
            active_week_id = data.get("activeWeekId")

            version = data.get("version", SNAPSHOT_VERSION)
            if version != SNAPSHOT_VERSION:
                logger.warning(f"알 수 없는 스냅샷 버전: {version}, 버전 {SNAPSHOT_VERSION}으로 해석")
        except SNAPSHOT_ERRORS as e:
            logger.error(f"스냅샷 형식 오류: {e}")
            return False

        if active_week_id is not None and not any(w.id == active_week_id for w in weeks):
            logger.warning(f"존재하지 않는 활성 주간 ID 무시: {active_week_id}")
            active_week_id = None

        self._weeks = weeks
        self._players = players
        self._active_week_id = active_week_id
        return True

    def save(self) -> None:
        """로컬 key/value 저장소에 스냅샷 저장"""
        try:
            self.kv.set(StorageKeys.APP_DATA, json.dumps(self.to_snapshot()))
        except Exception as e:
            logger.exception(f"로컬 저장 실패: {e}")

    def load(self) -> bool:
        """로컬 스냅샷 로드 (없거나 손상되면 False, 상태 유지)"""
        raw = self.kv.get(StorageKeys.APP_DATA)
        if not raw:
            return False
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"로컬 스냅샷 로드 실패: {e}")
            return False
        return self._apply_snapshot(data)

    def clear(self) -> None:
        """전체 상태 초기화 + 로컬 스냅샷 삭제"""
        self._weeks = []
        self._players = []
        self._active_week_id = None
        self.kv.remove(StorageKeys.APP_DATA)
        for listener in list(self._listeners):
            listener()

    def export_json(self) -> str:
        """백업용 JSON (들여쓰기 2)"""
        return json.dumps(self.to_snapshot(), indent=2)

    def import_json(self, json_string: str) -> bool:
        """백업 JSON으로 상태 전체 교체 (실패 시 변경 없음)"""
        try:
            data = json.loads(json_string)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"가져오기 실패: {e}")
            return False

        if not self._apply_snapshot(data):
            return False

        self._commit()
        logger.info(f"가져오기 완료: 주간 {self.week_count}개, 플레이어 {self.player_count}명")
        return True

    # =========================================================================
    # 클라우드 동기화
    # =========================================================================

    async def force_sync_to_cloud(self) -> RemoteResult:
        """대기 중인 push를 취소하고 즉시 원격 쓰기"""
        if self.cloud is None:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)
        return await self.cloud.force_push(self.to_snapshot())

    async def sync_from_cloud(self) -> RemoteResult:
        """원격 스냅샷으로 로컬 상태 교체 (병합 없음)"""
        if self.cloud is None:
            return RemoteResult.fail(NOT_CONFIGURED_ERROR)

        def apply(data: dict[str, Any]) -> bool:
            if not self._apply_snapshot(data):
                return False
            # 원격에서 받은 상태를 다시 push하지 않도록 로컬 저장만
            self.save()
            for listener in list(self._listeners):
                listener()
            return True

        return await self.cloud.pull(apply)
