"""Health check router."""

from datetime import datetime, timezone

from fastapi import APIRouter
from sqlalchemy import text

from postsmith import __version__
from postsmith.config import get_settings
from postsmith.dependencies import ComponentsDep
from postsmith.schemas.health import HealthResponse, ServiceStatus
from postsmith.utils.logger import get_logger

router = APIRouter()
log = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(components: ComponentsDep) -> HealthResponse:
    """
    Liveness probe. Not rate limited and needs no token.

    Checks:
    - Store connectivity (postgres backend only)
    - LLM provider configuration

    Returns:
        HealthResponse with status and service details
    """
    services = {}
    overall_status = "ok"
    settings = get_settings()

    # Check store
    if settings.store_backend == "memory":
        services["store"] = ServiceStatus(
            status="healthy",
            message="In-memory store",
            details={"cache_entries": len(components.cache)},
        )
    else:
        try:
            from postsmith.database import get_session_factory

            async with get_session_factory()() as session:
                await session.execute(text("SELECT 1"))
            services["store"] = ServiceStatus(status="healthy", message="Connected")
        except Exception as e:
            log.error("health check failed", service="store", error=str(e))
            services["store"] = ServiceStatus(status="unhealthy", message="Service unavailable")
            overall_status = "degraded"

    # Check LLM provider configuration
    if components.llm.is_configured:
        services["llm"] = ServiceStatus(
            status="healthy",
            message=f"LLM provider configured: {components.llm.provider_name}",
            details={"model": components.llm.model},
        )
    else:
        log.warning("health check failed", service="llm", error="no api key configured")
        services["llm"] = ServiceStatus(status="unhealthy", message="Service unavailable")
        overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
