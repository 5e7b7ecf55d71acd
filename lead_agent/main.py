"""
Vapi Lead Nurture Agent - FastAPI Application

Vapi posts call events to /api/vapi/webhook. For assistant-request events we
generate the next spoken reply via OpenAI; every other event is acknowledged.

GUARANTEE: model failures never surface as HTTP errors - the caller hears an
apology instead. Only failures outside the model call return 500.

Python 3.9 compatible.
"""

import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, load_env_files, load_settings
from .models import (
    Acknowledgement,
    AssistantReply,
    AssistantRequestEvent,
    ErrorResponse,
    HealthResponse,
    StatusResponse,
    parse_event,
)
from .openai_service import OpenAIService
from .responder import ResponseGenerator

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/api/vapi/webhook"

# Max chars of caller/agent text shown in INFO logs
MAX_PREVIEW_CHARS = 80


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _mask_key(key: Optional[str]) -> str:
    """Mask API key showing only last 4 chars."""
    if not key:
        return "(not set)"
    if len(key) <= 4:
        return "****"
    return f"****{key[-4:]}"


def _preview(text: str) -> str:
    return text[:MAX_PREVIEW_CHARS] + "..." if len(text) > MAX_PREVIEW_CHARS else text


async def _read_json_body(request: Request) -> Any:
    """Decode the webhook body.

    Empty bodies and non-JSON content types decode to {} so they are
    acknowledged; only a non-empty JSON body that fails to parse raises.
    """
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";")[0].strip().lower()
    if media_type != "application/json":
        return {}

    raw = await request.body()
    if not raw.strip():
        return {}
    return json.loads(raw)


def create_app(settings: Settings) -> FastAPI:
    """Build the application around an explicit Settings object.

    Services are created here rather than in the lifespan so that the app is
    fully wired even when driven without lifespan events (e.g. ASGITransport).
    """
    openai_service = OpenAIService(settings)
    response_generator = ResponseGenerator(openai_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        base_url = f"http://localhost:{settings.port}"
        logger.info("=" * 60)
        logger.info("Server is running!")
        logger.info(f"URL: {base_url}")
        logger.info(f"Webhook: {base_url}{WEBHOOK_PATH}")
        logger.info(
            f"OPENAI_API_KEY present: {bool(settings.openai_api_key)} "
            f"({_mask_key(settings.openai_api_key)})"
        )
        logger.info(f"OPENAI_MODEL: {settings.openai_model}")
        logger.info("=" * 60)

        yield

        await openai_service.close()
        logger.info("Shutting down Vapi Lead Nurture Agent")

    app = FastAPI(
        title="Vapi Lead Nurture Agent",
        description="Webhook bridge between Vapi voice calls and OpenAI",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.openai_service = openai_service
    app.state.response_generator = response_generator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_model=StatusResponse)
    async def root() -> StatusResponse:
        """Liveness banner with server time."""
        return StatusResponse(timestamp=datetime.now(timezone.utc).isoformat())

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Health check endpoint. Independent of configuration."""
        return HealthResponse()

    @app.post(WEBHOOK_PATH, response_model=None)
    async def vapi_webhook(request: Request):
        """
        Receive a Vapi call event.

        - assistant-request: reply with {"response": <text to speak>}
        - anything else: reply with {"received": true}
        - unexpected error (bad body, bug): 500 {"error": "Internal server error"}
        """
        try:
            body = await _read_json_body(request)
            logger.info("Received call event from Vapi")
            logger.debug(f"Payload: {json.dumps(body, indent=2)}")

            event = parse_event(body)

            if isinstance(event, AssistantRequestEvent):
                logger.info(f"User said: '{_preview(event.transcript)}'")
                generator: ResponseGenerator = request.app.state.response_generator
                reply = await generator.generate(event.transcript)
                logger.info(f"AI responds: '{_preview(reply)}'")
                return AssistantReply(response=reply)

            logger.info(f"Acknowledged event type={event.type}")
            return Acknowledgement()

        except Exception as e:
            logger.error(
                f"METRIC webhook_unexpected_error error={type(e).__name__}",
                exc_info=True,
            )
            return JSONResponse(status_code=500, content=ErrorResponse().model_dump())

    return app


load_env_files()
settings = load_settings()
configure_logging(settings.debug)

# Module-level ASGI app for `uvicorn lead_agent.main:app` and serverless hosts
app = create_app(settings)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
