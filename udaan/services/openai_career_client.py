"""
OpenAI client for career suggestions

Calls never raise: every outcome is reported as a CompletionResult so the
suggestion service can branch on rate limiting vs. other failures.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from openai import AsyncOpenAI, RateLimitError

from udaan.config import Settings
from udaan.utils.logger import get_logger
from udaan.utils.metrics import track_duration

logger = get_logger("career.openai")


CAREER_SYSTEM_PROMPT = """You are an expert, precise career advisor for students and early professionals. Analyze the user's interests, skills and goals and return a concise, factual JSON object matching the schema below. No prose outside the JSON. Be specific and grounded in current market demand.

REQUIREMENTS:
- Return ONLY valid JSON (no explanation or extra text). Do NOT wrap the JSON in markdown or code fences.
- Provide 2-3 focused career suggestions in the exact field name "careers" (array).
- Each career object must include these exact keys: "title", "description", "why", "keySkills" (array), "marketDemand", "growthPath", "steps" (array), "requiredQualifications", "learningResources" (array).
- For any list-like fields, use JSON arrays (not newline strings). For short lists, prefer arrays of strings.
- Keep text concise, factual, and grounded in observable market demand. Avoid hypotheticals or vague language.
- If unsure about a value, return an empty string or empty array for that field rather than omitting it.
- If the user's interests name technical topics (AI, ML, data, a programming language), prioritize technical entry roles even when skills are minimal.
- If the user's education is secondary school, recommend entry-level roles, apprenticeships, certificates and internships.
- The "why" must reference the user's explicit inputs.

JSON shape (strict example):
{
  "careers": [
    {
      "title": "Data Scientist",
      "description": "Apply statistics and ML to extract insights from data.",
      "why": "Matches your Python and analysis skills and job market demand.",
      "keySkills": ["Python", "Statistics", "Machine Learning"],
      "marketDemand": "High demand in tech and finance",
      "growthPath": "Junior Data Scientist → Senior Data Scientist → ML Engineer / Researcher",
      "steps": ["Learn Python and ML basics", "Build a portfolio project", "Apply for internships"],
      "requiredQualifications": "Bachelor's in related field or equivalent experience",
      "learningResources": ["Coursera: Machine Learning", "fast.ai"]
    }
  ],
  "mood": "😌 Neutral",
  "insight": "Focus on applied machine learning and portfolio projects"
}"""

REPAIR_SYSTEM_PROMPT = (
    "You are a JSON fixer. The user will provide text that should represent a JSON object. "
    "Your only job is to output a single valid JSON object that follows the requested schema. "
    "Do NOT add any commentary."
)


def build_user_prompt(
    interests: str,
    skills: str,
    mindset: str,
    background: Optional[str] = None,
    task: Optional[str] = None,
) -> str:
    return f"""User Profile:
Interests: {interests or 'Not specified'}
Skills: {skills or 'Not specified'}
Current Mindset: {mindset or 'Not specified'}
Additional Context: {background or 'None provided'}
Focus Area: {task or 'General career advice'}"""


def build_repair_prompt(raw_text: str) -> str:
    return (
        "Here is the model output that failed to parse as JSON. "
        f"Convert it into valid JSON that matches the schema:\n\n{raw_text}"
    )


class CompletionStatus(str, Enum):
    OK = "ok"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


@dataclass(frozen=True)
class CompletionResult:
    status: CompletionStatus
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == CompletionStatus.OK


def is_rate_limit_error(exc: Exception) -> bool:
    """True for HTTP 429 / quota errors, however the SDK surfaces them."""
    if isinstance(exc, RateLimitError):
        return True
    for attr in ("status_code", "status", "code"):
        status = getattr(exc, attr, None)
        if status is None:
            continue
        if status == 429 or str(status) == "429" or "rate" in str(status).lower():
            return True
    return False


class CareerLLMClient:
    """Chat-completion wrapper returning CompletionResult instead of raising"""

    def __init__(self, api_key: str, model: str = "gpt-3.5-turbo", timeout: float = 60.0, client=None):
        # Transport retries off: the suggestion service owns the retry policy
        self.client = client or AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self.model = model

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.0,
        max_tokens: int = 800,
    ) -> CompletionResult:
        try:
            async with track_duration("openai", "career"):
                response = await self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
        except Exception as exc:
            if is_rate_limit_error(exc):
                logger.warning(f"OpenAI rate limit / quota exceeded: {exc}", extra={"status": 429})
                return CompletionResult(CompletionStatus.RATE_LIMITED, error=str(exc))
            logger.error(
                f"OpenAI request failed: {exc}",
                extra={"error": str(exc)[:200], "error_type": type(exc).__name__},
            )
            return CompletionResult(CompletionStatus.FAILED, error=str(exc))

        text = ""
        if response.choices:
            text = (response.choices[0].message.content or "").strip()
        logger.debug(f"OpenAI raw message: {text[:2000] or '(empty)'}")
        return CompletionResult(CompletionStatus.OK, text=text)


def build_llm_client(settings: Settings) -> Optional[CareerLLMClient]:
    """Client when OPENAI_API_KEY is configured, else None (rule-based only)"""
    if not settings.openai_api_key:
        logger.info("OPENAI_API_KEY not set; career suggestions will use rule-based fallback")
        return None
    try:
        return CareerLLMClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.openai_timeout,
        )
    except Exception as e:
        logger.warning(f"OpenAI client not available: {e}")
        return None
