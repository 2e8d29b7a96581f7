"""Generation pipeline shared by /generate and /refine.

Per request: validate, classify the caller, check quota, build the prompt,
get text from the cache or upstream, rate it, commit usage, append history.
Any step may raise a ``BaseAPIException``; nothing after it runs.
"""

from typing import Optional

from postsmith.clients.upstream_client import UpstreamClient
from postsmith.records import BrandProfile, HistoryItem
from postsmith.schemas.generation import (
    GenerateRequest,
    GenerateResponse,
    RefineRequest,
    UsageInfo,
)
from postsmith.services.auth_service import AuthenticatedUser
from postsmith.services.guest_quota import GuestQuotaTracker
from postsmith.services.history_service import HistoryService
from postsmith.services.prompt_builder import build_prompt
from postsmith.services.response_cache import ResponseCache
from postsmith.services.usage_ledger import AccountUsageLedger
from postsmith.services.validation import GenerationInput, SanitizationValidator
from postsmith.utils.clock import Clock, utc_now
from postsmith.utils.logger import get_logger

log = get_logger(__name__)


def guest_cache_identity(ip: str) -> str:
    return f"guest:{ip}"


class GenerationService:
    """Runs the guest and account generation flows."""

    def __init__(
        self,
        validator: SanitizationValidator,
        cache: ResponseCache,
        upstream: UpstreamClient,
        guest_tracker: GuestQuotaTracker,
        ledger: AccountUsageLedger,
        history: HistoryService,
        clock: Clock = utc_now,
    ):
        self.validator = validator
        self.cache = cache
        self.upstream = upstream
        self.guest_tracker = guest_tracker
        self.ledger = ledger
        self.history = history
        self._clock = clock

    async def generate(
        self, payload: GenerateRequest, user: Optional[AuthenticatedUser], ip: str
    ) -> GenerateResponse:
        """Generate a post. Guests are identified by ``ip`` and get one trial a day."""
        request = self.validator.validate_generation(
            topic=payload.topic,
            platform=payload.platform,
            tone=payload.tone,
            language=payload.language,
            refinement=getattr(payload, "refinement", None),
        )
        if user is None:
            return await self._generate_for_guest(request, ip)
        return await self._generate_for_account(request, user)

    async def refine(self, payload: RefineRequest, user: AuthenticatedUser) -> GenerateResponse:
        """Same pipeline as ``generate``; a valid refinement label is mandatory."""
        request = self.validator.validate_generation(
            topic=payload.topic,
            platform=payload.platform,
            tone=payload.tone,
            language=payload.language,
            refinement=payload.refinement,
            require_refinement=True,
        )
        return await self._generate_for_account(request, user)

    async def _generate_for_guest(self, request: GenerationInput, ip: str) -> GenerateResponse:
        self.guest_tracker.check(ip)

        prompt = build_prompt(
            topic=request.topic,
            platform=request.platform,
            tone=request.tone,
            language=request.language,
            brand_profile=BrandProfile(),
            refinement=request.refinement,
        )
        generation = await self.cache.get_or_generate(guest_cache_identity(ip), prompt)
        quality = await self.upstream.analyze(generation.text, request.language)

        used = self.guest_tracker.increment(ip)
        log.info(
            "guest generation completed",
            ip=ip,
            platform=request.platform.value,
            cached=generation.cached,
        )

        return GenerateResponse(
            text=generation.text,
            quality=quality,
            usage=UsageInfo(
                daily_generations=used, limit=self.guest_tracker.limit, is_guest=True
            ),
            requires_login=True,
            estimated_tokens=generation.estimated_tokens,
            cached=generation.cached,
        )

    async def _generate_for_account(
        self, request: GenerationInput, user: AuthenticatedUser
    ) -> GenerateResponse:
        record = await self.ledger.read_or_create(
            user.uid, name=user.name or "", email=user.email or ""
        )
        # Fail fast before upstream work; increment_atomic re-checks both
        self.ledger.check_cooldown(record)
        self.ledger.check_daily_limit(record)

        prompt = build_prompt(
            topic=request.topic,
            platform=request.platform,
            tone=request.tone,
            language=request.language,
            brand_profile=record.brand_profile,
            refinement=request.refinement,
        )
        generation = await self.cache.get_or_generate(user.uid, prompt)
        quality = await self.upstream.analyze(generation.text, request.language)

        await self.ledger.increment_atomic(user.uid)
        await self.history.append(
            user.uid,
            HistoryItem(
                id=self.history.new_item_id(),
                topic=request.topic,
                platform=request.platform.value,
                tone=request.tone.value,
                language=request.language.value,
                text=generation.text,
                created_at=self._clock(),
                quality=quality,
                refinement=request.refinement.value if request.refinement else None,
            ),
        )

        fresh = await self.ledger.get(user.uid)
        log.info(
            "generation completed",
            identity=user.uid,
            platform=request.platform.value,
            refinement=request.refinement.value if request.refinement else None,
            cached=generation.cached,
            daily=fresh.daily_generations,
        )

        return GenerateResponse(
            text=generation.text,
            quality=quality,
            usage=UsageInfo(
                daily_generations=fresh.daily_generations,
                limit=self.ledger.daily_limit,
                is_guest=False,
            ),
            estimated_tokens=generation.estimated_tokens,
            cached=generation.cached,
        )
