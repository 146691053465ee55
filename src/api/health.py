"""
Health check endpoints.
"""

import time
from datetime import datetime

from fastapi import APIRouter

from src.config import config

router = APIRouter(tags=["health"])

# Track service start time for uptime calculations
start_time = time.time()


@router.get("/health")
async def health_check():
    """Liveness probe - service is running."""
    return {
        "status": "healthy",
        "service": config.service_name,
        "timestamp": datetime.now().isoformat(),
        "version": config.service_version,
        "uptime": round(time.time() - start_time, 3),
    }
