from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from datetime import datetime, timezone
from udaan.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class CareerSuggestion(Base):
    """
    Log of computed career suggestions
    One row per answered request, whichever path produced it
    """
    __tablename__ = "career_suggestions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=True, index=True)  # Anonymous requests have no user

    # Request fields (interests, skills, mindset, mood, moodNote, context)
    input = Column(JSON, nullable=False)

    # Full result JSON returned to the frontend, including _meta
    result = Column(JSON, nullable=False)
    mood = Column(String)
    insight = Column(Text)

    # openai / fallback / fallback_cache
    source = Column(String, index=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "input": self.input,
            "result": self.result,
            "mood": self.mood,
            "insight": self.insight,
            "source": self.source,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
