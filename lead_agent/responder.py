"""
Response generator - decides what the agent says next.

Flow:
1. Empty transcript (call just connected) -> fixed greeting, no model call
2. Otherwise -> one OpenAI call with the advisor prompt
3. Empty model output -> fallback prompt for more detail
4. Model failure -> apology asking the caller to repeat
"""

import logging

from .openai_service import CompletionFailure, OpenAIService
from .prompts import APOLOGY_REPLY, FALLBACK_REPLY, GREETING, build_messages

logger = logging.getLogger(__name__)


class ResponseGenerator:
    """Turns the caller's latest utterance into reply text."""

    def __init__(self, openai_service: OpenAIService):
        self.openai_service = openai_service

    async def generate(self, user_message: str) -> str:
        if not user_message:
            logger.info("METRIC greeting_sent")
            return GREETING

        result = await self.openai_service.complete(build_messages(user_message))

        if isinstance(result, CompletionFailure):
            error_name = type(result.error).__name__ if result.error is not None else "none"
            logger.warning(f"METRIC apology_sent reason={result.reason} error={error_name}")
            return APOLOGY_REPLY

        if result.content is None:
            logger.warning("METRIC fallback_reply_used reason=empty_content")
            return FALLBACK_REPLY

        return result.content
