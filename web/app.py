"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.bootstrap import build_runtime
from core.ledger.store import LedgerStore
from web.routes import health, players, summary, sync, weeks
from web.routes.health import API_VERSION

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    외부에서 주입된 store가 없으면 설정으로부터 조립하고 종료 시 정리.
    """
    runtime = None
    if getattr(app.state, "store", None) is None:
        runtime = build_runtime()
        app.state.store = runtime.store
        logger.info("Web: LedgerStore 초기화 완료")

    yield

    if runtime is not None:
        await runtime.aclose()
        logger.info("Web: 리소스 정리 완료")


def create_app(store: LedgerStore | None = None) -> FastAPI:
    """FastAPI 앱 생성

    Args:
        store: 사용할 LedgerStore (None이면 lifespan에서 설정으로 조립)
    """
    app = FastAPI(
        title="Slide Ledger API",
        description="주간 정산 장부 API",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.store = store

    # CORS 설정 (개발용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # API 라우터 등록
    # =========================================================================

    app.include_router(health.router)
    app.include_router(players.router)
    app.include_router(weeks.router)
    app.include_router(summary.router)
    app.include_router(sync.router)

    return app


app = create_app()
