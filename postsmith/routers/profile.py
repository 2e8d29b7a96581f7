"""Brand profile router."""

from fastapi import APIRouter

from postsmith.dependencies import CurrentUserRequired, RateLimitGuard, UsageLedgerDep, ValidatorDep
from postsmith.schemas.profile import BrandProfileSchema, ProfileRequest, ProfileResponse

router = APIRouter(dependencies=[RateLimitGuard])


@router.post("/profile", response_model=ProfileResponse)
async def upsert_profile(
    payload: ProfileRequest,
    user: CurrentUserRequired,
    validator: ValidatorDep,
    ledger: UsageLedgerDep,
) -> ProfileResponse:
    """Sanitize and store the brand profile, then echo it back."""
    profile = validator.sanitize_profile(
        display_name=payload.display_name,
        bio=payload.bio,
        writing_style=payload.writing_style,
        target_audience=payload.target_audience,
    )
    saved = await ledger.save_profile(
        user.uid, profile, name=user.name or "", email=user.email or ""
    )
    return ProfileResponse(success=True, profile=BrandProfileSchema.from_profile(saved))
