"""Configuration settings for Text2Deck."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from core.errors import ConfigurationError

# =============================================================================
# Path Configuration (always relative to project structure)
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_FILE = PROJECT_ROOT / "configs" / "config.yaml"


# =============================================================================
# Config Loading
# =============================================================================


def load_config() -> dict[str, Any]:
    """Load configuration from config.yaml."""
    if CONFIG_FILE.exists():
        with open(CONFIG_FILE) as f:
            return yaml.safe_load(f) or {}
    return {}


def get_config(key: str, default: Any = None) -> Any:
    """Get a config value by dot-notation key (e.g., 'api.port')."""
    config = load_config()
    keys = key.split(".")
    value = config
    for k in keys:
        if isinstance(value, dict):
            value = value.get(k)
        else:
            return default
    return value if value is not None else default


# =============================================================================
# OAuth client configuration (from the environment)
# =============================================================================


class OAuthConfig(BaseModel):
    """Google OAuth client registration."""

    client_id: str
    client_secret: str
    redirect_uri: str


def get_oauth_config() -> OAuthConfig:
    """Read the OAuth client settings from the environment.

    Raises:
        ConfigurationError: If any of the three variables is unset or empty
    """
    names = {
        "client_id": "GOOGLE_CLIENT_ID",
        "client_secret": "GOOGLE_CLIENT_SECRET",
        "redirect_uri": "GOOGLE_REDIRECT_URI",
    }
    values = {field: os.getenv(env_name, "") for field, env_name in names.items()}
    missing = [names[field] for field, value in values.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Missing environment variable(s): {', '.join(missing)}"
        )
    return OAuthConfig(**values)


# =============================================================================
# Convenience accessors
# =============================================================================


def get_api_host() -> str:
    return get_config("api.host", "0.0.0.0")


def get_api_port() -> int:
    return get_config("api.port", 8000)


def get_cookie_secure() -> bool:
    return get_config("api.cookie_secure", True)


def get_post_login_redirect() -> str:
    return get_config("api.post_login_redirect", "/")


def get_session_ttl_seconds() -> int:
    return get_config("session.ttl_seconds", 14 * 24 * 60 * 60)


def get_flow_cookie_max_age() -> int:
    return get_config("oauth.flow_cookie_max_age", 600)


def get_max_slides() -> int:
    return get_config("slides.max_slides", 100)


def get_default_max_words() -> int:
    return get_config("splitters.default_max_words", 50)


def get_default_max_chars() -> int:
    return get_config("splitters.default_max_chars", 500)


def get_upstream_timeout() -> int:
    return get_config("timeouts.upstream", 30)


def get_log_level() -> str:
    return get_config("logging.level", "INFO")
