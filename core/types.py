"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class PaymentStatus(str, Enum):
    """주간 정산 시 플레이어 결제 상태"""

    PENDING = "pending"  # 검토 전
    PAID = "paid"  # 완납
    UNPAID = "unpaid"  # 미납 (전액 이월)
    PARTIAL = "partial"  # 부분 납부 (잔액 이월)


class WeekStatus(str, Enum):
    """주간 장부 상태"""

    ACTIVE = "active"
    PENDING_CLOSE = "pending_close"
    CLOSED = "closed"


class SyncState(str, Enum):
    """클라우드 동기화 상태"""

    IDLE = "idle"
    SYNCING = "syncing"
    SUCCESS = "success"
    ERROR = "error"
