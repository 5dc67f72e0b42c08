"""
Udaan career service - Test Configuration and Fixtures
"""
import os
from types import SimpleNamespace
from typing import AsyncGenerator, List

import pytest
from httpx import AsyncClient, ASGITransport

# Set testing environment before the app reads its settings
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_udaan.db'
os.environ['OPENAI_API_KEY'] = ''
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['ENVIRONMENT'] = 'test'
os.environ['JWT_SECRET'] = 'test-jwt-secret-for-udaan-career-tests'

from udaan.main import app
from udaan.database import Base, engine
from udaan.routes.career import get_career_service
from udaan.schemas.career import CareerRequest
from udaan.services.cache import TTLCache
from udaan.services.career_service import CareerSuggestionService
from udaan.services.openai_career_client import CompletionResult, CompletionStatus
from udaan.utils import metrics

JWT_SECRET = 'test-jwt-secret-for-udaan-career-tests'


class FakeClock:
    """Controllable time source for TTLCache"""

    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLLMClient:
    """Returns queued CompletionResults and records every call"""

    def __init__(self, *results: CompletionResult):
        self.results = list(results)
        self.calls: List[dict] = []

    async def complete(self, system_prompt, user_prompt, *, temperature=0.0, max_tokens=800):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if not self.results:
            return CompletionResult(CompletionStatus.FAILED, error="no scripted response")
        return self.results.pop(0)


class InMemoryStore:
    """SuggestionStore stand-in keeping records in a list"""

    def __init__(self, fail: bool = False):
        self.records: List[dict] = []
        self.fail = fail

    async def create(self, *, input, result, user_id=None, mood=None, insight=None):
        if self.fail:
            raise RuntimeError("database unavailable")
        self.records.append({
            "user_id": user_id,
            "input": input,
            "result": result,
            "mood": mood,
            "insight": insight,
        })
        return SimpleNamespace(id=len(self.records))


def ok(text: str) -> CompletionResult:
    return CompletionResult(CompletionStatus.OK, text=text)


def career_request(**fields) -> CareerRequest:
    return CareerRequest.model_validate(fields)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def make_service(clock, store):
    """Factory for services sharing the test clock and store"""

    def _make(client=None, **kwargs) -> CareerSuggestionService:
        kwargs.setdefault("cache", TTLCache(ttl_seconds=3600, clock=clock))
        kwargs.setdefault("store", store)
        return CareerSuggestionService(client=client, **kwargs)

    return _make


@pytest.fixture
async def db():
    """Fresh tables for each test that touches the database"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(make_service) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with a rule-based-only service writing to the in-memory store"""
    service = make_service()
    app.dependency_overrides[get_career_service] = lambda: service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()
