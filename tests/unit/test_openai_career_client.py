"""
Unit Tests for the OpenAI career client
Tests for: result statuses, rate limit detection, client construction from settings
"""
from types import SimpleNamespace

import httpx
import pytest
from openai import RateLimitError

from udaan.config import Settings
from udaan.services.openai_career_client import (
    CareerLLMClient,
    CompletionStatus,
    build_llm_client,
    build_user_prompt,
    is_rate_limit_error,
)


def rate_limit_error() -> RateLimitError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return RateLimitError("Rate limit reached", response=httpx.Response(429, request=request), body=None)


class StatusError(Exception):
    def __init__(self, status):
        super().__init__(f"status {status}")
        self.status = status


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_client(completions: FakeCompletions) -> CareerLLMClient:
    sdk = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return CareerLLMClient(api_key="sk-test", model="gpt-test", client=sdk)


class TestIsRateLimitError:
    """Test rate limit detection"""

    def test_sdk_rate_limit_error(self):
        assert is_rate_limit_error(rate_limit_error()) is True

    def test_status_attribute(self):
        assert is_rate_limit_error(StatusError(429)) is True
        assert is_rate_limit_error(StatusError("429")) is True

    def test_rate_code(self):
        assert is_rate_limit_error(StatusError("rate_limit_exceeded")) is True

    def test_other_errors(self):
        assert is_rate_limit_error(StatusError(500)) is False
        assert is_rate_limit_error(ConnectionError("reset")) is False


class TestComplete:
    """Test CareerLLMClient.complete"""

    @pytest.mark.asyncio
    async def test_ok_strips_content(self):
        completions = FakeCompletions(content='  {"careers": []}\n')
        result = await make_client(completions).complete("system", "user", temperature=0.2, max_tokens=100)

        assert result.status == CompletionStatus.OK
        assert result.ok is True
        assert result.text == '{"careers": []}'
        assert completions.kwargs["model"] == "gpt-test"
        assert completions.kwargs["temperature"] == 0.2
        assert completions.kwargs["max_tokens"] == 100
        assert completions.kwargs["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "user"},
        ]

    @pytest.mark.asyncio
    async def test_empty_content(self):
        result = await make_client(FakeCompletions(content=None)).complete("s", "u")
        assert result.status == CompletionStatus.OK
        assert result.text == ""

    @pytest.mark.asyncio
    async def test_rate_limited(self):
        result = await make_client(FakeCompletions(error=rate_limit_error())).complete("s", "u")
        assert result.status == CompletionStatus.RATE_LIMITED
        assert result.ok is False

    @pytest.mark.asyncio
    async def test_other_failure(self):
        result = await make_client(FakeCompletions(error=RuntimeError("boom"))).complete("s", "u")
        assert result.status == CompletionStatus.FAILED
        assert result.error == "boom"


class TestBuildClient:
    """Test client construction from settings"""

    def test_no_api_key_means_no_client(self):
        assert build_llm_client(Settings(openai_api_key="")) is None

    def test_api_key_builds_client(self):
        client = build_llm_client(Settings(openai_api_key="sk-test", openai_model="gpt-4o-mini"))
        assert isinstance(client, CareerLLMClient)
        assert client.model == "gpt-4o-mini"


class TestUserPrompt:
    """Test user prompt defaults"""

    def test_defaults_for_missing_fields(self):
        prompt = build_user_prompt("", "", "")
        assert "Interests: Not specified" in prompt
        assert "Additional Context: None provided" in prompt
        assert "Focus Area: General career advice" in prompt
