"""Configuration management utilities."""

import os
from typing import Optional

DEFAULT_API_URL = "https://api.onename.com/v1"
DEFAULT_TIMEOUT = 30.0


def get_default_api_url() -> str:
    """Get the registry API root from the environment, or the public default."""
    env_url = os.environ.get("BLOCKSTACK_API_URL")
    if env_url:
        return env_url.rstrip("/")
    return DEFAULT_API_URL


def get_default_timeout() -> float:
    """Get the request timeout (seconds) from the environment."""
    raw = os.environ.get("BLOCKSTACK_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT


def get_env_credentials() -> tuple[Optional[str], Optional[str]]:
    """Get (app_id, app_secret) from the environment; either may be None."""
    return (
        os.environ.get("BLOCKSTACK_APP_ID") or None,
        os.environ.get("BLOCKSTACK_APP_SECRET") or None,
    )
