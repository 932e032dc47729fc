from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from utility.config import Settings, load_settings
from utility.dto import ErrorResponse, GenerateEmailRequest, GenerateEmailResponse
from utility.email_relay import EmailRelay
from utility.exceptions import ConfigurationError, GenerationFailed, ValidationError
from utility.gemini_client import GeminiClient
from utility.logger import setup_logger

logger = logging.getLogger(__name__)

HEALTH_MESSAGE = "Hindi Speech-to-Email Generator Backend is running!"
MISSING_TEXT_MESSAGE = "Hindi text is required."


def configure_logging(settings: Settings) -> None:
    for name in ("app", "utility"):
        setup_logger(name, settings.log_level, settings.log_dir)


def build_relay(settings: Settings) -> EmailRelay:
    """Create the relay from settings; a missing credential is fatal."""
    api_key = settings.require_api_key()
    client = GeminiClient(
        api_key=api_key,
        model=settings.gemini_model,
        api_base=settings.gemini_api_base,
    )
    return EmailRelay(client, include_example=settings.include_example)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def create_app(relay: Optional[EmailRelay] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    # -----------------------------
    # Startup
    # -----------------------------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "relay", None) is None:
            try:
                app.state.relay = build_relay(settings)
            except ConfigurationError as e:
                logger.error("%s", e)
                raise SystemExit(1)
        logger.info("✅ Relay ready (model: %s)", settings.gemini_model)
        yield

    app = FastAPI(title="Hindi Speech-to-Email Generator", lifespan=lifespan)
    app.state.settings = settings
    if relay is not None:
        app.state.relay = relay

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------
    # Error handlers
    # -----------------------------
    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, MISSING_TEXT_MESSAGE)

    @app.exception_handler(ValidationError)
    async def invalid_instruction(request: Request, exc: ValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(GenerationFailed)
    async def generation_failed(request: Request, exc: GenerationFailed):
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.user_message)

    # -----------------------------
    # HTTP Endpoints
    # -----------------------------
    @app.get("/", response_class=PlainTextResponse)
    async def health():
        return HEALTH_MESSAGE

    @app.post(
        "/generate-email",
        response_model=GenerateEmailResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def generate_email(body: GenerateEmailRequest, request: Request):
        if not body.hindiText or not body.hindiText.strip():
            raise ValidationError(MISSING_TEXT_MESSAGE)

        result = await request.app.state.relay.generate_email(body.hindiText)
        return GenerateEmailResponse(
            englishEmail=result.english_email,
            hindiEnglishMapping=result.mapping,
        )

    return app


app = create_app()


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    settings = app.state.settings
    try:
        settings.require_api_key()
    except ConfigurationError as e:
        logger.error("%s", e)
        raise SystemExit(1)

    host = host or settings.host
    port = port or settings.port
    logger.info("Server listening on port %s", port)
    logger.info("Access backend at http://localhost:%s", port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
