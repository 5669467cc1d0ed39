"""FastAPI application for the Text2Deck web interface."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import Cookie, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse, Response

from backend.generation_service import GenerationService, generation_service
from backend.oauth import exchange_code, start_authorization, verify_state
from backend.schemas import (
    CreateSlidesResponse,
    ErrorResponse,
    SplitterInfo,
    SplitterListResponse,
)
from backend.session_manager import SessionManager, session_manager
from backend.slides_client import presentation_url
from core.config import (
    get_cookie_secure,
    get_default_max_chars,
    get_default_max_words,
    get_flow_cookie_max_age,
    get_oauth_config,
    get_post_login_redirect,
    get_upstream_timeout,
)
from core.errors import InvalidRequestError, Text2DeckError
from core.schemas import ContentRequest
from core.splitter import describe_splitters
from utils.http_tools import HttpClient

logger = logging.getLogger(__name__)

STATE_COOKIE = "state"
VERIFIER_COOKIE = "verifier"
SESSION_COOKIE = "sid"

app = FastAPI(
    title="Text2Deck API",
    description="Turn pasted text into a Google Slides presentation",
    version="1.0.0",
)

http_client = HttpClient(timeout_s=get_upstream_timeout())


# ============================================================================
# Dependencies
# ============================================================================


def get_session_manager() -> SessionManager:
    return session_manager


def get_generation_service() -> GenerationService:
    return generation_service


def get_http_client() -> HttpClient:
    return http_client


# ============================================================================
# Helper Functions
# ============================================================================


def set_cookie(response: Response, name: str, value: str, max_age: int) -> None:
    """Set an HttpOnly, SameSite=Lax cookie scoped to the whole site."""
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        path="/",
        httponly=True,
        samesite="lax",
        secure=get_cookie_secure(),
    )


@app.exception_handler(Text2DeckError)
async def text2deck_error_handler(request: Request, exc: Text2DeckError):
    """Render domain errors with the status code their class carries."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    body = ErrorResponse(error=str(exc), message=exc.summary)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    body = ErrorResponse(error=str(exc.errors()), message="Invalid request body")
    return JSONResponse(status_code=400, content=body.model_dump())


# ============================================================================
# OAuth Endpoints
# ============================================================================


@app.get("/oauth/start")
async def oauth_start():
    """Redirect to Google's consent screen, remembering state and verifier in cookies."""
    config = get_oauth_config()
    auth = start_authorization(config)

    response = RedirectResponse(auth.authorization_url, status_code=307)
    max_age = get_flow_cookie_max_age()
    set_cookie(response, STATE_COOKIE, auth.state, max_age)
    set_cookie(response, VERIFIER_COOKIE, auth.verifier, max_age)
    return response


@app.get("/oauth/callback")
async def oauth_callback(
    request: Request,
    manager: Annotated[SessionManager, Depends(get_session_manager)],
    http: Annotated[HttpClient, Depends(get_http_client)],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
):
    """Finish the flow: check state, exchange the code, start a session."""
    if error:
        raise InvalidRequestError(f"Authorization denied: {error}")

    # State is checked before anything else is looked at.
    verify_state(request.cookies.get(STATE_COOKIE), state)

    if not code:
        raise InvalidRequestError("missing code")
    verifier = request.cookies.get(VERIFIER_COOKIE)
    if not verifier:
        raise InvalidRequestError("no verifier cookie")

    config = get_oauth_config()
    loop = asyncio.get_running_loop()
    token = await loop.run_in_executor(
        None, lambda: exchange_code(config, code, verifier, http)
    )
    session_id = manager.bind(token)

    response = RedirectResponse(get_post_login_redirect(), status_code=302)
    set_cookie(response, SESSION_COOKIE, session_id, manager.ttl_seconds)
    response.delete_cookie(STATE_COOKIE, path="/")
    response.delete_cookie(VERIFIER_COOKIE, path="/")
    return response


# ============================================================================
# Slide Endpoints
# ============================================================================


@app.post("/api/create-slides", response_model=CreateSlidesResponse)
async def create_slides(
    content_request: ContentRequest,
    manager: Annotated[SessionManager, Depends(get_session_manager)],
    service: Annotated[GenerationService, Depends(get_generation_service)],
    http: Annotated[HttpClient, Depends(get_http_client)],
    sid: Annotated[str | None, Cookie()] = None,
):
    """Create a presentation with one slide per chunk of the posted content."""
    token = manager.resolve(sid)

    loop = asyncio.get_running_loop()
    presentation_id = await loop.run_in_executor(
        None,
        lambda: service.create_slides_from_text(token, content_request, http),
    )

    return CreateSlidesResponse(
        presentation_id=presentation_id,
        presentation_url=presentation_url(presentation_id),
    )


@app.get("/api/splitters", response_model=SplitterListResponse)
async def list_splitters():
    """Describe the available splitting strategies."""
    catalogue = describe_splitters(get_default_max_words(), get_default_max_chars())
    return SplitterListResponse(
        splitters=[SplitterInfo(**item) for item in catalogue]
    )


# ============================================================================
# Health Check
# ============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Text2Deck API",
        "login": "/oauth/start",
        "docs": "/docs",
    }
