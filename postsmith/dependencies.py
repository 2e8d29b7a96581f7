"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Header, Request

from postsmith.factories.service_factories import Components
from postsmith.services.auth_service import AuthenticatedUser, AuthService, get_auth_service
from postsmith.services.dashboard_service import DashboardService
from postsmith.services.generation_service import GenerationService
from postsmith.services.history_service import HistoryService
from postsmith.services.usage_ledger import AccountUsageLedger
from postsmith.services.validation import SanitizationValidator
from postsmith.exceptions import MissingTokenError
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


# ============================================================================
# Components (built once in the lifespan)
# ============================================================================


def get_components(request: Request) -> Components:
    """Get the service graph from app state."""
    return request.app.state.components


ComponentsDep = Annotated[Components, Depends(get_components)]


def get_generation_service(components: ComponentsDep) -> GenerationService:
    return components.generation


def get_dashboard_service(components: ComponentsDep) -> DashboardService:
    return components.dashboard


def get_history_service(components: ComponentsDep) -> HistoryService:
    return components.history


def get_usage_ledger(components: ComponentsDep) -> AccountUsageLedger:
    return components.ledger


def get_validator(components: ComponentsDep) -> SanitizationValidator:
    return components.validator


GenerationServiceDep = Annotated[GenerationService, Depends(get_generation_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
HistoryServiceDep = Annotated[HistoryService, Depends(get_history_service)]
UsageLedgerDep = Annotated[AccountUsageLedger, Depends(get_usage_ledger)]
ValidatorDep = Annotated[SanitizationValidator, Depends(get_validator)]


# ============================================================================
# Caller address
# ============================================================================


def get_client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, else the socket peer, else "unknown"."""
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else "unknown"


ClientIp = Annotated[str, Depends(get_client_ip)]


# ============================================================================
# Authentication Dependencies
# ============================================================================


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_user_optional(
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
) -> AuthenticatedUser | None:
    """Get current user if a token is sent, None otherwise.

    A token that is present but fails verification is rejected with 401
    rather than treated as a guest.
    """
    if not authorization:
        return None
    return await auth_service.verify_token(authorization)


async def get_current_user_required(
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
) -> AuthenticatedUser:
    """Get current user, raise 401 if not authenticated."""
    if not authorization:
        raise MissingTokenError()
    return await auth_service.verify_token(authorization)


# Type aliases for auth dependencies
CurrentUserOptional = Annotated[AuthenticatedUser | None, Depends(get_current_user_optional)]
CurrentUserRequired = Annotated[AuthenticatedUser, Depends(get_current_user_required)]


# ============================================================================
# Outer rate limit
# ============================================================================


async def enforce_rate_limit(components: ComponentsDep, ip: ClientIp) -> None:
    """Count the request against the caller's per-minute budget. Raises 429 when full."""
    components.rate_limiter.hit(ip)


RateLimitGuard = Depends(enforce_rate_limit)
