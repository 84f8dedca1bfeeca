"""Registry endpoint templates."""
from dataclasses import dataclass

from .utils.config import DEFAULT_API_URL


@dataclass(frozen=True)
class Endpoints:
    """Base URL for each registry resource family.

    ``search`` is a prefix the encoded query is appended to; every other
    entry is joined with ``/``-separated path segments.
    """
    lookup: str = f"{DEFAULT_API_URL}/users"
    search: str = f"{DEFAULT_API_URL}/search?query="
    all_users: str = f"{DEFAULT_API_URL}/users"
    addresses: str = f"{DEFAULT_API_URL}/addresses"
    domains: str = f"{DEFAULT_API_URL}/domains"
    # Reserved for broadcast_transaction
    transactions: str = f"{DEFAULT_API_URL}/transactions"

    @classmethod
    def from_base_url(cls, base_url: str) -> "Endpoints":
        """Derive every endpoint from one API root (e.g. a self-hosted server)."""
        base = base_url.rstrip("/")
        return cls(
            lookup=f"{base}/users",
            search=f"{base}/search?query=",
            all_users=f"{base}/users",
            addresses=f"{base}/addresses",
            domains=f"{base}/domains",
            transactions=f"{base}/transactions",
        )


DEFAULT_ENDPOINTS = Endpoints()
