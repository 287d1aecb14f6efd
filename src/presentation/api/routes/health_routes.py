"""Health Check Routes"""
from fastapi import APIRouter

from src.infrastructure.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict:
    """ヘルスチェック"""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
        "backend": settings.persistence_backend,
    }
