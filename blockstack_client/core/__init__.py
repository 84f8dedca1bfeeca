"""Core module with types and exceptions."""

from .types import (
    RegistryRequest,
    RegistryResult,
    ClientConfig,
    UserRecord,
    LookupResponse,
    SearchResult,
    SearchResponse,
    AllUsersResponse,
    UnspentOutput,
    DKIMPublicKey,
)
from .exceptions import (
    BlockstackError,
    ConfigurationError,
    ValidationError,
    RegistryError,
    TransportError,
    ProtocolError,
    AuthenticationError,
    NotFoundError,
    ParseError,
    EmptyResponseError,
)

__all__ = [
    "RegistryRequest",
    "RegistryResult",
    "ClientConfig",
    "UserRecord",
    "LookupResponse",
    "SearchResult",
    "SearchResponse",
    "AllUsersResponse",
    "UnspentOutput",
    "DKIMPublicKey",
    "BlockstackError",
    "ConfigurationError",
    "ValidationError",
    "RegistryError",
    "TransportError",
    "ProtocolError",
    "AuthenticationError",
    "NotFoundError",
    "ParseError",
    "EmptyResponseError",
]
