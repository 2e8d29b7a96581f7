"""Generation router: /generate for guests and accounts, /refine for accounts."""

from fastapi import APIRouter

from postsmith.dependencies import (
    ClientIp,
    CurrentUserOptional,
    CurrentUserRequired,
    GenerationServiceDep,
    RateLimitGuard,
)
from postsmith.schemas.generation import GenerateRequest, GenerateResponse, RefineRequest

router = APIRouter(dependencies=[RateLimitGuard])


@router.post("/generate", response_model=GenerateResponse, response_model_exclude_none=True)
async def generate_post(
    payload: GenerateRequest,
    user: CurrentUserOptional,
    ip: ClientIp,
    service: GenerationServiceDep,
) -> GenerateResponse:
    """
    Generate one social post.

    Without a bearer token the caller is a guest: one trial per IP per day,
    flagged with ``requiresLogin``. With a token the account's daily limit
    and cooldown apply and the result is saved to history.
    """
    return await service.generate(payload, user, ip)


@router.post("/refine", response_model=GenerateResponse, response_model_exclude_none=True)
async def refine_post(
    payload: RefineRequest,
    user: CurrentUserRequired,
    service: GenerationServiceDep,
) -> GenerateResponse:
    """Regenerate with a refinement instruction. Counts against the daily limit."""
    return await service.refine(payload, user)
