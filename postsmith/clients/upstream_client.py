"""Upstream generation with bounded retry, plus best-effort quality analysis."""

import logging
import re

from pydantic import ValidationError as PydanticValidationError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_none,
)

from postsmith.clients.base_llm_client import BaseLLMClient
from postsmith.exceptions import RateLimitExceededError, UpstreamCallError, UpstreamError
from postsmith.schemas.quality import FALLBACK_ASSESSMENT, QualityAssessment
from postsmith.utils.logger import get_logger, truncate

log = get_logger(__name__)
_tenacity_logger = logging.getLogger(f"{__name__}.retry")

ANALYSIS_PROMPT = (
    "Analyze this {language} social post and return strict JSON with keys "
    "hookScore (0-10), clarityScore (0-10), engagementLevel (Low|Medium|High), "
    "suggestions (array of short strings). Post: {post}"
)

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def parse_assessment(raw: str) -> QualityAssessment:
    """Parse upstream analysis output, falling back to the neutral assessment."""
    normalized = _CODE_FENCE.sub("", raw).strip()
    try:
        return QualityAssessment.model_validate_json(normalized)
    except PydanticValidationError as e:
        log.info(
            "quality analysis unparseable, using fallback",
            errors=e.error_count(),
            raw=truncate(raw, 200),
        )
        return FALLBACK_ASSESSMENT


class UpstreamClient:
    """Generation service facade.

    ``generate`` retries transport failures, non-success statuses and empty
    output up to ``max_attempts`` in total. Rate limits are raised at once.
    """

    def __init__(
        self,
        llm: BaseLLMClient,
        max_attempts: int = 3,
        retry_wait_seconds: float = 1.0,
        temperature: float = 0.8,
        max_output_tokens: int = 700,
    ):
        self.llm = llm
        self.max_attempts = max_attempts
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        if retry_wait_seconds > 0:
            self._wait = wait_exponential(
                multiplier=retry_wait_seconds, min=retry_wait_seconds, max=retry_wait_seconds * 8
            )
        else:
            self._wait = wait_none()

    async def _complete_once(self, prompt: str) -> str:
        raw = await self.llm.generate_completion(
            [{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=self.max_output_tokens,
        )
        text = (raw or "").strip()
        if not text:
            raise UpstreamCallError("Upstream returned empty output.")
        return text

    async def generate(self, prompt: str) -> str:
        """Return generated text for ``prompt``.

        Raises:
            RateLimitExceededError: Upstream rate limit (not retried)
            UpstreamError: All attempts failed; carries the last failure message
        """
        text = ""
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self._wait,
                retry=retry_if_exception_type(UpstreamCallError),
                before_sleep=before_sleep_log(_tenacity_logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    text = await self._complete_once(prompt)
        except UpstreamCallError as e:
            log.error(
                "upstream generation failed",
                model=self.llm.model,
                attempts=self.max_attempts,
                error=str(e),
            )
            raise UpstreamError(f"Upstream failed after retries: {e}") from e
        return text

    async def analyze(self, text: str, language: str) -> QualityAssessment:
        """Ask the upstream to rate ``text``. Never raises on bad output."""
        prompt = ANALYSIS_PROMPT.format(language=language, post=text)
        try:
            raw = await self.generate(prompt)
        except (UpstreamError, RateLimitExceededError) as e:
            log.warning("quality analysis unavailable, using fallback", error=e.message)
            return FALLBACK_ASSESSMENT
        return parse_assessment(raw)
