"""Shared fixtures: app wired to a mocked AsyncOpenAI client."""

from typing import Optional
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from lead_agent.config import Settings
from lead_agent.main import create_app


def mock_openai_response(content: Optional[str]) -> MagicMock:
    """Create a mock OpenAI chat completion with a single choice."""
    mock_completion = MagicMock()
    mock_completion.choices = [MagicMock(message=MagicMock(content=content))]
    return mock_completion


@pytest.fixture
def test_settings() -> Settings:
    return Settings(openai_api_key="test-key-for-testing", openai_model="gpt-4")


@pytest.fixture
def mock_openai():
    """Patch AsyncOpenAI; yields the class mock. Its client's create() is an AsyncMock."""
    with patch("lead_agent.openai_service.AsyncOpenAI") as mock_openai_cls:
        mock_client = MagicMock()
        mock_client.chat.completions.create = AsyncMock(
            return_value=mock_openai_response("Happy to help.")
        )
        mock_client.close = AsyncMock()
        mock_openai_cls.return_value = mock_client
        yield mock_openai_cls


@pytest.fixture
def mock_create(mock_openai) -> AsyncMock:
    """The stubbed chat.completions.create call."""
    return mock_openai.return_value.chat.completions.create


@pytest.fixture
def app(mock_openai, test_settings):
    """App built while AsyncOpenAI is patched."""
    return create_app(test_settings)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def unconfigured_client(mock_openai):
    """Test client for an app started without OPENAI_API_KEY."""
    app = create_app(Settings(openai_api_key=None))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
