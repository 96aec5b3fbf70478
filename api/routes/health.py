"""Health check and connectivity routes"""

from typing import Optional
from fastapi import APIRouter, Depends
import logging

from app.config import settings
from adapters.network_monitor import NetworkMonitor
from api.dependencies import get_network_monitor
from api.responses import HealthResponse, NetworkStatusResponse

router = APIRouter(tags=["Health"])
logger = logging.getLogger("countme.api.health")


@router.get("/health-check", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint"""
    return HealthResponse(status="ok", service=settings.app_name, version=settings.app_version)


@router.get("/network-status", response_model=NetworkStatusResponse)
async def network_status(monitor: Optional[NetworkMonitor] = Depends(get_network_monitor)):
    """
    Current reachability of the outside network.

    When monitoring is disabled the service assumes it is online.
    """
    if monitor is None:
        return NetworkStatusResponse(connected=True, monitoring=False)
    return NetworkStatusResponse(connected=monitor.is_connected, monitoring=monitor.running)
