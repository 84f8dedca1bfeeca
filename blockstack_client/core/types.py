"""Type definitions for the client."""
from typing import TypedDict, Optional, Dict, Any, List
from dataclasses import dataclass, field

from ..utils.config import get_default_api_url, get_default_timeout, get_env_credentials


@dataclass(frozen=True)
class RegistryRequest:
    """A single outbound registry request."""
    operation: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "GET"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (Authorization value redacted)."""
        headers = dict(self.headers)
        if "Authorization" in headers:
            headers["Authorization"] = "Basic ***"
        return {
            "operation": self.operation,
            "method": self.method,
            "url": self.url,
            "headers": headers,
        }


@dataclass
class RegistryResult:
    """Outcome of one operation as delivered to a completion callback."""
    payload: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self):
        # Allows ``payload, error = result``
        yield self.payload
        yield self.error


@dataclass
class ClientConfig:
    """Client configuration, usually loaded from the environment."""
    app_id: Optional[str] = None
    app_secret: Optional[str] = None
    base_url: str = field(default_factory=get_default_api_url)
    timeout: float = field(default_factory=get_default_timeout)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build from BLOCKSTACK_* environment variables."""
        app_id, app_secret = get_env_credentials()
        return cls(app_id=app_id, app_secret=app_secret)


# Response payload shapes. These describe what the registry returns; bodies
# are passed through unvalidated.
class UserRecord(TypedDict, total=False):
    """Profile data for one looked-up username."""
    profile: Dict[str, Any]
    verifications: List[Dict[str, Any]]


LookupResponse = Dict[str, UserRecord]


class SearchResult(TypedDict, total=False):
    profile: Dict[str, Any]
    username: str


class SearchResponse(TypedDict, total=False):
    results: List[SearchResult]


class RegistrationStats(TypedDict):
    registrations: int


class AllUsersResponse(TypedDict, total=False):
    """Registry-wide enumeration."""
    stats: RegistrationStats
    usernames: List[str]


class UnspentOutput(TypedDict, total=False):
    transaction_hash: str
    output_index: int
    value: int
    script_hex: str
    confirmations: int


class DKIMPublicKey(TypedDict, total=False):
    """DKIM key published under the blockchainid._domainkey record."""
    public_key: str
    key_type: str
