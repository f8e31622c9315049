"""Service Health — liveness and document-store readiness for the OrderItem API.

Invariants:
    - GET /api/v1/health/ answers 200 while the process serves requests
    - GET /api/v1/health/ready answers 503 until the database accepts a query
    - No identity header needed on either route
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from order_api.infrastructure import database

SERVICE_NAME = "order-api"
SERVICE_VERSION = "1.0.0"

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check():
    """Ready once the OrderItem table's database answers SELECT 1."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
