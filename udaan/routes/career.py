"""
Career Suggestion API Routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from udaan.config import get_settings
from udaan.middleware.auth import get_optional_user_id, get_user_id
from udaan.schemas.career import CareerRequest
from udaan.services.career_service import CareerSuggestionService
from udaan.services.suggestion_store import SuggestionStore
from udaan.utils.logger import get_logger

settings = get_settings()

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
logger = get_logger("routes.career")


def get_career_service(request: Request) -> CareerSuggestionService:
    return request.app.state.career_service


def get_suggestion_store(request: Request) -> SuggestionStore:
    return request.app.state.suggestion_store


@router.post("")
@limiter.limit(settings.career_rate_limit)
async def create_career_suggestions(
    request: Request,
    data: CareerRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    service: CareerSuggestionService = Depends(get_career_service),
):
    """
    Career suggestions for the given interests, skills and mindset

    Always answers 200 with {careers, mood, insight, _meta}; _meta.source tells
    whether the language model or the rule-based fallback produced it.

    When the model answer was rejected, _meta.invalidShape is true and
    _meta.parseError is true if no JSON could be parsed even after the repair
    call (false means JSON parsed but lacked the required fields).
    """
    return await service.suggest(data, user_id=user_id)


@router.get("/history")
async def list_career_suggestions(
    limit: int = Query(20, ge=1, le=100),
    user_id: str = Depends(get_user_id),
    store: SuggestionStore = Depends(get_suggestion_store),
):
    """Past suggestions of the signed-in user, newest first"""
    records = await store.list_for_user(user_id, limit=limit)
    return {"suggestions": [record.to_dict() for record in records]}
