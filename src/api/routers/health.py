from fastapi import APIRouter
from ...core.config import settings

router = APIRouter(tags=["health"])

@router.get("/health")
async def health():
    return {
        "status": "ok",
        "app": settings.app_name,
        "azure_configured": settings.is_azure_configured,
    }
