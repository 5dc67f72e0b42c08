"""
Pydantic schemas for career suggestions

The result models double as the normalizer for language-model output:
each field lists the alternate names models tend to use, and list fields
accept delimited strings.
"""
import re
from typing import Any, Dict, List, Optional
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
    model_validator,
)


MAX_LIST_ITEMS = 6

# Keys under which a model may return the list of careers, in priority order
CAREER_LIST_KEYS = ("careers", "careerSuggestions", "suggestions", "results")

# Top-level keys that mean the object itself is a single career
SINGLE_CAREER_KEYS = ("title", "description", "keySkills")

_LIST_DELIMITERS = re.compile(r"[,;\n\r•]+")


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v).strip() for v in value if v is not None and str(v).strip())
    return str(value).strip()


def _coerce_list(value: Any) -> List[str]:
    if isinstance(value, str):
        items = _LIST_DELIMITERS.split(value)
    elif isinstance(value, (list, tuple)):
        items = [v if isinstance(v, str) else _coerce_text(v) for v in value]
    else:
        return []
    cleaned = [item.strip().lstrip("-*").strip() for item in items]
    return [item for item in cleaned if item][:MAX_LIST_ITEMS]


def _prefer_non_empty(model_cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    For each aliased field, move the first non-empty alternate onto the
    primary key so that e.g. {"title": "", "role": "Dev"} yields "Dev".
    """
    resolved = dict(data)
    for field in model_cls.model_fields.values():
        if not isinstance(field.validation_alias, AliasChoices):
            continue
        keys = [key for key in field.validation_alias.choices if isinstance(key, str)]
        value = next((data[key] for key in keys if data.get(key)), None)
        if value is not None:
            resolved[keys[0]] = value
    return resolved


# ========== Result Schemas ==========
class CareerItem(BaseModel):
    """One suggested career, serialized with camelCase keys"""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field("", validation_alias=AliasChoices("title", "role", "name"))
    description: str = Field("", validation_alias=AliasChoices("description", "desc", "summary"))
    why: str = Field("", validation_alias=AliasChoices("why", "reason", "match"))
    key_skills: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("keySkills", "keySkillsNeeded", "skills", "key_skills"),
        serialization_alias="keySkills",
    )
    market_demand: str = Field(
        "",
        validation_alias=AliasChoices("marketDemand", "market_demand", "demand", "potentialEmployers"),
        serialization_alias="marketDemand",
    )
    growth_path: str = Field(
        "",
        validation_alias=AliasChoices("growthPath", "careerPath", "path"),
        serialization_alias="growthPath",
    )
    steps: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("steps", "nextSteps", "actions", "recommendations"),
    )
    required_qualifications: str = Field(
        "",
        validation_alias=AliasChoices("requiredQualifications", "qualifications", "requirements"),
        serialization_alias="requiredQualifications",
    )
    learning_resources: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("learningResources", "learning_resources", "resources"),
        serialization_alias="learningResources",
    )

    @model_validator(mode="before")
    @classmethod
    def _resolve_aliases(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return _prefer_non_empty(cls, data)

    @field_validator(
        "title", "description", "why", "market_demand", "growth_path", "required_qualifications",
        mode="before",
    )
    @classmethod
    def _text_field(cls, value: Any) -> str:
        return _coerce_text(value)

    @field_validator("key_skills", "steps", "learning_resources", mode="before")
    @classmethod
    def _list_field(cls, value: Any) -> List[str]:
        return _coerce_list(value)


class CareerSuggestionResult(BaseModel):
    """Canonical suggestion payload returned to the frontend"""
    careers: List[CareerItem] = Field(
        default_factory=list,
        validation_alias=AliasChoices(*CAREER_LIST_KEYS),
    )
    mood: str = Field("", validation_alias=AliasChoices("mood", "emotion"))
    insight: str = Field("", validation_alias=AliasChoices("insight", "summary"))

    @model_validator(mode="before")
    @classmethod
    def _single_career_object(cls, data: Any) -> Any:
        # {"title": ..., "keySkills": ...} at the top level instead of a list
        if not isinstance(data, dict):
            return data
        data = _prefer_non_empty(cls, data)
        careers = data.get(CAREER_LIST_KEYS[0])
        if isinstance(careers, list) and careers:
            return data
        if any(data.get(key) for key in SINGLE_CAREER_KEYS):
            return {**data, "careers": [data]}
        return data

    @field_validator("careers", mode="before")
    @classmethod
    def _career_list(cls, value: Any) -> list:
        if not isinstance(value, list):
            return []
        return [item if isinstance(item, (dict, CareerItem)) else {} for item in value]

    @field_validator("mood", "insight", mode="before")
    @classmethod
    def _text_field(cls, value: Any) -> str:
        return _coerce_text(value)

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# ========== Request Schemas ==========
class CareerContext(BaseModel):
    """Free-form request context; task selects the suggestion focus"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    task: Optional[str] = Field(None, description="explore/skills/industry/courses/opportunities/roadmap")
    query_type: Optional[str] = Field(None, alias="queryType")
    full_background: Optional[str] = Field(None, alias="fullBackground")

    @property
    def focus(self) -> str:
        return (self.task or self.query_type or "explore").lower()


class CareerRequest(BaseModel):
    """Body of POST /api/career"""
    model_config = ConfigDict(populate_by_name=True)

    interests: StrictStr = ""
    skills: StrictStr = ""
    mindset: StrictStr = ""
    mood: Optional[float] = None
    mood_note: str = Field("", alias="moodNote")
    context: CareerContext = Field(default_factory=CareerContext)

    @field_validator("context", mode="before")
    @classmethod
    def _default_context(cls, value: Any) -> Any:
        return {} if value is None else value

    def context_dict(self) -> Dict[str, Any]:
        return self.context.model_dump(by_alias=True, exclude_unset=True)

    def cache_signature(self) -> Dict[str, Any]:
        """Fields that determine the suggestion; used for the cache key"""
        return {
            "interests": self.interests,
            "skills": self.skills,
            "mindset": self.mindset,
            "context": self.context_dict(),
        }

    def log_input(self) -> Dict[str, Any]:
        return {
            **self.cache_signature(),
            "mood": self.mood,
            "moodNote": self.mood_note,
        }
