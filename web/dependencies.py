"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
LedgerStore는 앱 생명주기에서 한 번 조립되어 app.state에 보관.
"""

from fastapi import Depends, Request

from core.config.loader import Settings, get_settings
from core.ledger.store import LedgerStore
from web.services.ledger_service import LedgerService


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


def get_ledger_store(request: Request) -> LedgerStore:
    """앱에 등록된 LedgerStore 반환"""
    return request.app.state.store


def get_ledger_service(store: LedgerStore = Depends(get_ledger_store)) -> LedgerService:
    """요청별 LedgerService 반환"""
    return LedgerService(store)
