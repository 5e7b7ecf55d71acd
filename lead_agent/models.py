"""
Pydantic models for the Vapi webhook API.

Inbound events are a tagged union keyed on message.type:
- AssistantRequestEvent: Vapi wants the next spoken reply
- UnknownEvent: everything else (status updates, end-of-call reports, junk)

Python 3.9 compatible - uses typing.Optional, typing.Union
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

ASSISTANT_REQUEST = "assistant-request"


class AssistantRequestEvent(BaseModel):
    """Caller spoke (or the call just started) and Vapi needs a reply."""
    type: Literal["assistant-request"] = ASSISTANT_REQUEST
    transcript: str = ""

    @field_validator("transcript", mode="before")
    @classmethod
    def _coerce_transcript(cls, value: Any) -> str:
        # Missing, null or non-string transcripts mean "nothing said yet"
        return value if isinstance(value, str) else ""


class UnknownEvent(BaseModel):
    """Any event this service only acknowledges."""
    type: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


VapiEvent = Union[AssistantRequestEvent, UnknownEvent]


def parse_event(body: Any) -> VapiEvent:
    """Classify a decoded webhook body.

    Never raises: anything that is not a well-formed assistant-request
    degrades to UnknownEvent.
    """
    message = body.get("message") if isinstance(body, dict) else None
    if not isinstance(message, dict):
        return UnknownEvent()

    if message.get("type") == ASSISTANT_REQUEST:
        return AssistantRequestEvent.model_validate(
            {"transcript": message.get("transcript")}
        )

    return UnknownEvent.model_validate({"type": message.get("type")})


class AssistantReply(BaseModel):
    """Text for Vapi to speak back to the caller."""
    response: str


class Acknowledgement(BaseModel):
    received: bool = True


class ErrorResponse(BaseModel):
    error: str = "Internal server error"


class HealthResponse(BaseModel):
    status: str = "healthy"


class StatusResponse(BaseModel):
    """Root endpoint payload - confirms the service is up."""
    status: str = "ok"
    message: str = "Vapi Lead Nurture Agent API is running!"
    timestamp: str = Field(..., description="ISO-8601 UTC time of the request")
