"""
Parsing, normalization and validation of language-model career output
"""
import json
import re
from typing import Any, Optional, Union

from pydantic import ValidationError

from udaan.schemas.career import CareerSuggestionResult
from udaan.utils.logger import get_logger

logger = get_logger("career.response")

_LEADING_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"```\s*$")


def try_parse_json(text: Any) -> Optional[Any]:
    """Parse model output as JSON, tolerating a ```json fence. None on failure."""
    if not text or not isinstance(text, str):
        return None
    cleaned = _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", text.strip())).strip()
    try:
        return json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Model output is not JSON: {type(e).__name__}")
        return None


def normalize_parsed_response(obj: Any) -> Union[CareerSuggestionResult, Any]:
    """
    Map the field-name variants models produce onto CareerSuggestionResult.

    Anything that is not a JSON object (including None) is returned as is
    and left for the validator to reject.
    """
    if not isinstance(obj, dict):
        return obj
    try:
        return CareerSuggestionResult.model_validate(obj)
    except ValidationError as e:
        logger.warning(f"Could not normalize model output: {e.error_count()} errors")
        return None


def is_valid_career_response(obj: Any) -> bool:
    """
    Structural gate for trusting model output.

    Requires at least one career, and for every career a non-empty title,
    description and why plus at least one key skill and one step.
    """
    if isinstance(obj, CareerSuggestionResult):
        obj = obj.to_response()
    if not isinstance(obj, dict):
        return False
    careers = obj.get("careers")
    if not isinstance(careers, list) or not careers:
        return False
    for career in careers:
        if not isinstance(career, dict):
            return False
        for field in ("title", "description", "why"):
            value = career.get(field)
            if not value or not isinstance(value, str):
                return False
        for field in ("keySkills", "steps"):
            value = career.get(field)
            if not isinstance(value, list) or len(value) < 1:
                return False
    return True
