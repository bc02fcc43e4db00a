from fastapi import APIRouter

from catalog.responses import send_success

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health():
    """Health check endpoint."""
    return send_success({"status": "ok"})
