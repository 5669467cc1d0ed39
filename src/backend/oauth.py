"""Google OAuth 2.0 authorization-code flow with PKCE."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
import string
import time
from urllib.parse import urlencode

import requests
from pydantic import ValidationError

from core.config import OAuthConfig
from core.errors import StateMismatchError, UpstreamAuthError
from core.schemas import AuthorizationState, Token
from utils.http_tools import HttpClient

logger = logging.getLogger(__name__)

# OAuth URLs
GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"

GOOGLE_SCOPES = [
    "https://www.googleapis.com/auth/presentations",
    "https://www.googleapis.com/auth/drive.file",
]

STATE_LENGTH = 24
VERIFIER_LENGTH = 64

_ALPHANUMERIC = string.ascii_letters + string.digits


def generate_random_string(length: int) -> str:
    """Random alphanumeric string from a cryptographically secure source."""
    return "".join(secrets.choice(_ALPHANUMERIC) for _ in range(length))


def generate_pkce_challenge(verifier: str) -> str:
    """S256 code challenge: unpadded base64url of SHA-256(verifier)."""
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def build_authorization_url(config: OAuthConfig, state: str, challenge: str) -> str:
    params = {
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
        "response_type": "code",
        "scope": " ".join(GOOGLE_SCOPES),
        "state": state,
        "code_challenge": challenge,
        "code_challenge_method": "S256",
        "access_type": "offline",
        "prompt": "consent",
    }
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


def start_authorization(config: OAuthConfig) -> AuthorizationState:
    """Begin an authorization flow.

    The returned ``state`` and ``verifier`` are not stored anywhere; the
    caller has to hand them to the client and get them back on the callback.
    """
    state = generate_random_string(STATE_LENGTH)
    verifier = generate_random_string(VERIFIER_LENGTH)
    challenge = generate_pkce_challenge(verifier)

    logger.info("Starting OAuth authorization for client %s", config.client_id)
    return AuthorizationState(
        authorization_url=build_authorization_url(config, state, challenge),
        state=state,
        verifier=verifier,
    )


def verify_state(expected: str | None, received: str | None) -> None:
    """Check the callback ``state`` against the one issued at start.

    The comparison is exact and case-sensitive, on the raw bytes.

    Raises:
        StateMismatchError: If either value is missing or they differ
    """
    if not expected or not received:
        raise StateMismatchError("Missing OAuth state")
    if not hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8")):
        logger.warning("OAuth callback state mismatch")
        raise StateMismatchError("state mismatch")


def exchange_code(
    config: OAuthConfig,
    code: str,
    verifier: str,
    http: HttpClient,
) -> Token:
    """Exchange an authorization code and PKCE verifier for a token.

    Args:
        config: OAuth client settings
        code: Authorization code from the callback query string
        verifier: The verifier issued by start_authorization
        http: Outbound HTTP client

    Returns:
        Token with ``created_at`` set to the current time

    Raises:
        UpstreamAuthError: If Google rejects the exchange, answers with an
            unreadable body, or cannot be reached
    """
    form = {
        "code": code,
        "client_id": config.client_id,
        "client_secret": config.client_secret,
        "redirect_uri": config.redirect_uri,
        "grant_type": "authorization_code",
        "code_verifier": verifier,
    }
    try:
        response = http.send(
            "POST",
            GOOGLE_TOKEN_URL,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data=form,
        )
    except requests.RequestException as e:
        logger.error("Token exchange request failed: %s", e)
        raise UpstreamAuthError(f"Token exchange request failed: {e}") from e

    if not response.ok:
        logger.error("Token exchange failed with HTTP %d", response.status_code)
        raise UpstreamAuthError(
            "Token exchange failed",
            upstream_status=response.status_code,
            body=response.text,
        )

    try:
        payload = response.json()
        token = Token.model_validate({**payload, "created_at": int(time.time())})
    except (ValueError, TypeError, ValidationError) as e:
        raise UpstreamAuthError(
            f"Unexpected token response: {e}",
            upstream_status=response.status_code,
            body=response.text,
        ) from e

    logger.info("Token exchange succeeded (scope: %s)", token.scope)
    return token
