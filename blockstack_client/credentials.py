"""App credentials and the process-wide default pair.

The registry authenticates every request with an app id and app secret sent
as HTTP Basic credentials. A client can be given its own ``Credentials``; a
client built without any falls back to the pair set through ``initialize``.
"""
import base64
import threading
from dataclasses import dataclass
from typing import Optional

from .utils.logger import get_logger

logger = get_logger("credentials")

_lock = threading.Lock()
_default_credentials: Optional["Credentials"] = None


@dataclass(frozen=True)
class Credentials:
    """Immutable app id / app secret pair."""
    app_id: Optional[str]
    app_secret: Optional[str]

    @property
    def is_valid(self) -> bool:
        return self.app_id is not None and self.app_secret is not None

    def basic_auth_value(self) -> str:
        """Return ``Basic <base64(app_id:app_secret)>``.

        The UTF-8 bytes of ``app_id:app_secret`` are encoded directly.
        """
        if not self.is_valid:
            raise ValueError("Both app_id and app_secret are required")
        raw = f"{self.app_id}:{self.app_secret}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def __repr__(self) -> str:
        secret = "***" if self.app_secret is not None else None
        return f"Credentials(app_id={self.app_id!r}, app_secret={secret!r})"


def initialize(app_id: Optional[str], app_secret: Optional[str]) -> None:
    """Set the process-wide credentials.

    No format validation is done; any previous pair is replaced.

    Args:
        app_id: The app id obtained from the registry API
        app_secret: The app secret obtained from the registry API
    """
    global _default_credentials
    with _lock:
        _default_credentials = Credentials(app_id=app_id, app_secret=app_secret)
    logger.debug("Default credentials initialized", app_id=app_id)


def get_default_credentials() -> Optional[Credentials]:
    """Return the process-wide credentials, or None before ``initialize``."""
    with _lock:
        return _default_credentials


def reset() -> None:
    """Forget the process-wide credentials."""
    global _default_credentials
    with _lock:
        _default_credentials = None
