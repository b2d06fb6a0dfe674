"""
주간 정산 장부

로스터 플레이어, 주간 장부, 이월 잔액을 관리하는 도메인 레이어.

사용 예시:
```python
from core.ledger import LedgerStore

store = LedgerStore(kv)
store.init()

week = store.create_week("Week 1")
record = store.add_week_player(week.id, "Alice", 7)
store.set_player_in(week.id, record.id, 100)

# 마감 검토 → 마감 → 다음 주간
store.start_close(week.id)
store.mark_player_unpaid(week.id, record.id)
store.close_week_and_update_carries(week.id)
store.create_next_week_from_closed(week.id)

# 누적 수금 현황
balance = store.get_running_balance()
```
"""

from core.ledger.player import CarryPayment, PlayerRecord
from core.ledger.player_week import PlayerWeekRecord
from core.ledger.store import LedgerStore
from core.ledger.types import (
    PlayerCarryBreakdown,
    RunningBalance,
    WeekBalanceLine,
    WeekCarryLine,
)
from core.ledger.week import CarryForwardLine, WeekLedger

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    "WeekLedger",
    "PlayerWeekRecord",
    "PlayerRecord",
    "CarryPayment",
    # 조회 모델
    "CarryForwardLine",
    "RunningBalance",
    "WeekBalanceLine",
    "WeekCarryLine",
    "PlayerCarryBreakdown",
]
