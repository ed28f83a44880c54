from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness probe"""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
