"""
Career Suggestion Service
Orchestrates language model -> repair -> validation -> rule-based fallback -> storage

Callers always get a usable result: every failure on the model path degrades
to the keyword rules, and the reason is recorded in the result's _meta.
"""
import json
from typing import Any, Callable, Dict, Optional

from udaan.config import Settings, get_settings
from udaan.schemas.career import CareerRequest, CareerSuggestionResult
from udaan.services.cache import TTLCache, stable_key
from udaan.services.career_fallback import generate_fallback
from udaan.services.career_response import (
    is_valid_career_response,
    normalize_parsed_response,
    try_parse_json,
)
from udaan.services.openai_career_client import (
    CAREER_SYSTEM_PROMPT,
    REPAIR_SYSTEM_PROMPT,
    CompletionStatus,
    build_repair_prompt,
    build_user_prompt,
)
from udaan.utils.logger import get_logger
from udaan.utils.metrics import inc

logger = get_logger("career")


class CareerSuggestionService:
    """
    Produces career suggestions for one request at a time

    Flow:
    1. No model client configured -> cached or freshly computed fallback
    2. Ask the model; rate limit or error -> fallback
    3. Output not JSON -> one repair call asking the model to reformat it
    4. Normalize field names, validate shape; invalid -> fallback
    5. Persist (best effort) and return
    """

    def __init__(
        self,
        client=None,
        cache: Optional[TTLCache] = None,
        store=None,
        settings: Optional[Settings] = None,
        fallback: Callable[[CareerRequest], CareerSuggestionResult] = generate_fallback,
    ):
        self.settings = settings or get_settings()
        self.client = client
        self.cache = cache if cache is not None else TTLCache(self.settings.career_fallback_cache_ttl)
        self.store = store
        self._generate_fallback = fallback

    async def suggest(self, request: CareerRequest, user_id: Optional[str] = None) -> Dict[str, Any]:
        logger.info(
            f"Career request input: {json.dumps(request.log_input(), ensure_ascii=False, default=str)}",
            extra={"task": request.context.focus, "user_id": user_id},
        )

        if self.client is None:
            return await self._fallback(request, user_id)

        context = request.context
        outcome = await self.client.complete(
            CAREER_SYSTEM_PROMPT,
            build_user_prompt(
                request.interests,
                request.skills,
                request.mindset,
                background=context.full_background,
                task=context.task,
            ),
            temperature=self.settings.career_temp,
            max_tokens=self.settings.career_max_tokens,
        )

        if outcome.status == CompletionStatus.RATE_LIMITED:
            logger.warning("Falling back to rule-based suggestions after rate limit")
            return await self._fallback(request, user_id, openaiError="rate_limit")
        if outcome.status == CompletionStatus.FAILED:
            return await self._fallback(request, user_id, openaiError=True)

        parsed = try_parse_json(outcome.text)
        if parsed is None:
            parsed = await self._repair(outcome.text)

        normalized = normalize_parsed_response(parsed)
        if not is_valid_career_response(normalized):
            keys = sorted(parsed.keys()) if isinstance(parsed, dict) else None
            logger.warning(
                f"Parsed response failed validation after normalization, falling back. Parsed keys: {keys or '(none)'}",
                extra={"keys": keys},
            )
            return await self._fallback(request, user_id, invalidShape=True, parseError=parsed is None)

        return await self._persist_and_return(request, user_id, normalized.to_response(), {"source": "openai"})

    async def _repair(self, raw_text: str) -> Optional[Any]:
        """Single attempt to have the model reformat its own output as strict JSON"""
        logger.warning(f"OpenAI returned non-JSON; attempting repair. Raw output (truncated): {raw_text[:2000]}")
        outcome = await self.client.complete(
            REPAIR_SYSTEM_PROMPT,
            build_repair_prompt(raw_text),
            temperature=0.0,
            max_tokens=self.settings.career_max_tokens,
        )
        if outcome.status != CompletionStatus.OK:
            logger.warning(f"Repair attempt failed with error: {outcome.error}")
            return None

        parsed = try_parse_json(outcome.text)
        if parsed is None:
            logger.warning(f"Repair attempt failed to produce valid JSON. Repaired text (truncated): {outcome.text[:2000]}")
        else:
            logger.info("Repair attempt succeeded")
        return parsed

    async def _fallback(self, request: CareerRequest, user_id: Optional[str], **flags: Any) -> Dict[str, Any]:
        key = stable_key(request.cache_signature())
        cached = self.cache.get(key)
        if cached is not None:
            return await self._persist_and_return(request, user_id, cached, {"source": "fallback_cache", **flags})

        result = self._generate_fallback(request).to_response()
        self.cache.set(key, result)
        return await self._persist_and_return(request, user_id, result, {"source": "fallback", **flags})

    async def _persist_and_return(
        self,
        request: CareerRequest,
        user_id: Optional[str],
        result: Dict[str, Any],
        meta: Dict[str, Any],
    ) -> Dict[str, Any]:
        response = {**result, "_meta": {**(result.get("_meta") or {}), **meta}}
        inc(f"career.source.{meta['source']}")

        if self.store is None:
            return response
        try:
            record = await self.store.create(
                user_id=user_id,
                input=request.log_input(),
                result=response,
                mood=response.get("mood"),
                insight=response.get("insight"),
            )
            logger.info(
                f"Career suggestions created: {record.id}",
                extra={"record_id": record.id, "source": meta["source"]},
            )
        except Exception as e:
            logger.warning(f"Failed to persist career suggestion: {e}", extra={"error": str(e)[:200]})
        return response
