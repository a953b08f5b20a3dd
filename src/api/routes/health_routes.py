"""헬스 체크 엔드포인트"""
from fastapi import APIRouter, Depends
from datetime import datetime

from src.schemas.blacklist_schema import HealthResponse
from src.services.impl.config_store import ConfigStore
from src.api.routes.config_routes import get_config_store
from src.core.logging import logger
from src import __version__

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(store: ConfigStore = Depends(get_config_store)):
    """
    헬스 체크 엔드포인트

    - 서버 상태
    - Redis(설정 저장소) 연결 상태
    """
    try:
        redis_ok = store.health_check()
    except Exception as e:
        logger.error(f"Unexpected config store error: {e}")
        redis_ok = False

    return HealthResponse(
        status="ok" if redis_ok else "error",
        timestamp=datetime.now(),
        version=__version__
    )


@router.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "config-api",
        "version": __version__,
        "docs": "/docs"
    }
