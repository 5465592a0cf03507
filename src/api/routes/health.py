"""Health check endpoint."""

import time
from datetime import datetime, timezone
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(request: Request):
    """Liveness check with process uptime in seconds."""
    return JSONResponse(content={
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
    })
