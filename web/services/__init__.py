"""
Web 서비스 패키지

도메인 객체 → 응답 스키마 변환
"""

from web.services.ledger_service import LedgerService, format_amount

__all__ = [
    "LedgerService",
    "format_amount",
]
