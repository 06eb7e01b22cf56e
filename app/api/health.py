from fastapi import APIRouter, HTTPException
import logging

from app.core.config import settings
from app.core.database import database_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["健康檢查"])


@router.get("")
async def health_check():
    """基礎健康檢查"""
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment
    }


@router.get("/database")
async def database_health():
    """資料庫連線健康檢查"""
    pg_status = await database_service.health_check()

    if pg_status["status"] != "healthy":
        logger.warning(f"資料庫連線檢查失敗: {pg_status['message']}")
        raise HTTPException(status_code=503, detail=pg_status["message"])

    logger.info("資料庫連線檢查通過")
    return {
        "postgresql": True,
        "details": {"postgresql": pg_status["message"]}
    }
