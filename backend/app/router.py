from fastapi import APIRouter

from backend.app.domain.api.router import v1 as domain_v1

router = APIRouter()

router.include_router(domain_v1)


@router.get("/health")
async def health_check():
    """健康检查端点"""
    return {"status": "ok", "message": "Service is healthy"}
