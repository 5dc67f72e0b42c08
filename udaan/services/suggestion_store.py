"""Persistence of answered career requests"""
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from udaan.models.career_suggestion import CareerSuggestion


class SuggestionStore:
    """Writes CareerSuggestion rows, each in its own session"""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def create(
        self,
        *,
        input: Dict[str, Any],
        result: Dict[str, Any],
        user_id: Optional[str] = None,
        mood: Optional[str] = None,
        insight: Optional[str] = None,
    ) -> CareerSuggestion:
        record = CareerSuggestion(
            user_id=user_id,
            input=input,
            result=result,
            mood=mood or None,
            insight=insight or None,
            source=(result.get("_meta") or {}).get("source"),
        )
        async with self.session_factory() as session:
            session.add(record)
            await session.commit()
            await session.refresh(record)
        return record

    async def list_for_user(self, user_id: str, limit: int = 20) -> List[CareerSuggestion]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(CareerSuggestion)
                .where(CareerSuggestion.user_id == user_id)
                .order_by(CareerSuggestion.created_at.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
