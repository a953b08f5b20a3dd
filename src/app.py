"""FastAPI 앱 팩토리 (Config API)"""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from src.core.config import settings
from src.core.logging import logger
from src.api import config_router, health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기"""
    logger.info("Starting config API...")
    yield
    logger.info("Shutting down config API...")


def create_app() -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Returns:
        FastAPI 앱 인스턴스
    """
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan
    )

    # 라우터 등록
    app.include_router(health_router)
    app.include_router(config_router)

    return app

# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
