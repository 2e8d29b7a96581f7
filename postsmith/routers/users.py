"""Users router -- /me endpoint for the caller's account record."""

from fastapi import APIRouter

from postsmith.dependencies import CurrentUserRequired, RateLimitGuard, UsageLedgerDep
from postsmith.schemas.users import AccountResponse, MeResponse

router = APIRouter(dependencies=[RateLimitGuard])


@router.get("/me", response_model=MeResponse)
async def get_me(user: CurrentUserRequired, ledger: UsageLedgerDep) -> MeResponse:
    """Get the caller's usage record and brand profile, creating it on first call."""
    record = await ledger.read_or_create(user.uid, name=user.name or "", email=user.email or "")
    return MeResponse(user=AccountResponse.from_record(record, daily_limit=ledger.daily_limit))
