# Database models package
from udaan.models.career_suggestion import CareerSuggestion

__all__ = [
    "CareerSuggestion",
]
