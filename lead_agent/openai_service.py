"""
OpenAI service for spoken replies.

RESILIENCE DESIGN:
- complete() NEVER raises - every outcome is a CompletionResult
- Missing API key is a failure result, not a startup crash
- No retries: one request per caller turn

Python 3.9 compatible - uses typing.Dict, typing.List, typing.Optional
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from openai import AsyncOpenAI

from .config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionSuccess:
    """Model answered. content is None when the reply carried no text."""
    content: Optional[str]


@dataclass(frozen=True)
class CompletionFailure:
    """Model call did not produce a usable response."""
    reason: str
    error: Optional[Exception] = None


CompletionResult = Union[CompletionSuccess, CompletionFailure]


def _first_choice_content(response: Any) -> Optional[str]:
    """Pull choices[0].message.content, tolerating missing pieces."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else None


class OpenAIService:
    """Thin wrapper around AsyncOpenAI chat completions."""

    def __init__(self, settings: Settings):
        self.model = settings.openai_model
        self.temperature = settings.temperature
        self.max_tokens = settings.max_tokens

        self.client: Optional[AsyncOpenAI] = None
        if settings.openai_api_key:
            self.client = AsyncOpenAI(api_key=settings.openai_api_key)
            logger.info(f"OpenAI service configured with model: {self.model}")
        else:
            logger.warning("OpenAI service NOT configured - OPENAI_API_KEY missing, replies will degrade")

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def complete(self, messages: List[Dict[str, str]]) -> CompletionResult:
        """Run one chat completion.

        GUARANTEE: returns CompletionFailure instead of raising, for network,
        auth, rate-limit and malformed-response errors alike.
        """
        if self.client is None:
            logger.error("METRIC model_api_error error=missing_api_key")
            return CompletionFailure(reason="missing_api_key")

        logger.info(f"Calling OpenAI ({self.model}) with {len(messages)} messages")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            content = _first_choice_content(response)
        except Exception as e:
            logger.error(
                f"METRIC model_api_error error={type(e).__name__} model={self.model}",
                exc_info=True,
            )
            return CompletionFailure(reason="openai_api_error", error=e)

        logger.debug(f"OpenAI raw response: {content[:500] if content else 'None'}")
        return CompletionSuccess(content=content)

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
