"""
除錯與監控端點
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from servicebox.api.dependencies import get_locator
from servicebox.core.config import get_settings
from servicebox.core.locator import Locator

router = APIRouter(tags=["除錯"])
logger = logging.getLogger(__name__)


@router.get("/debug/locator")
async def debug_locator(locator: Locator = Depends(get_locator)):
    """除錯端點 - 檢查 Locator 狀態"""
    return {
        "status": "success",
        "locator": locator.get_stats(),
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/metrics")
async def metrics():
    """Prometheus 監控指標端點"""
    if not get_settings().ENABLE_METRICS:
        raise HTTPException(status_code=503, detail="Prometheus metrics are disabled")

    try:
        metrics_data = generate_latest()
    except Exception as e:
        logger.error(f"Failed to generate metrics: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to generate metrics: {str(e)}")

    return Response(
        content=metrics_data,
        media_type=CONTENT_TYPE_LATEST,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
