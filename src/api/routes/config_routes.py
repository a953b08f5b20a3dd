"""Config Routes - 키별 설정 값 저장/조회

저장소는 요청 본문을 그대로 저장하고 그대로 돌려줍니다. (검증/병합 없음)
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from src.core.logging import logger
from src.core.exceptions import ConfigUnavailableException
from src.services.impl.config_store import ConfigStore

router = APIRouter(prefix="/config", tags=["config"])

JSON_MEDIA_TYPE = "application/json"

# 싱글톤 서비스
_config_store: Optional[ConfigStore] = None


def get_config_store() -> ConfigStore:
    """ConfigStore 싱글톤"""
    global _config_store
    if _config_store is None:
        _config_store = ConfigStore()
    return _config_store


@router.get("/{key}")
def get_configuration(key: str, store: ConfigStore = Depends(get_config_store)):
    """설정 값 조회 (저장된 바이트 그대로)"""
    try:
        value = store.get(key)
    except ConfigUnavailableException as e:
        logger.error(f"[CONFIG_API] GET {key} failed: {e}")
        raise HTTPException(status_code=503, detail=e.message)

    if value is None:
        raise HTTPException(status_code=404, detail=f"config key '{key}' not found")

    return Response(content=value, media_type=JSON_MEDIA_TYPE)


@router.put("/{key}")
async def set_configuration(key: str, request: Request, store: ConfigStore = Depends(get_config_store)):
    """설정 값 저장 후 본문을 그대로 반환"""
    body = await request.body()
    try:
        store.set(key, body)
    except ConfigUnavailableException as e:
        logger.error(f"[CONFIG_API] PUT {key} failed: {e}")
        raise HTTPException(status_code=503, detail=e.message)

    logger.info(f"[CONFIG_API] Config updated: {key}")
    return Response(content=body, media_type=JSON_MEDIA_TYPE)
