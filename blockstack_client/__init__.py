# Blockstack Client
"""
Blockstack Client - An async Python client for the Blockstack identity registry.

Structure:
- client.py: BlockstackClient with all registry operations
- credentials.py: App credentials and the process-wide default pair
- endpoints.py: Registry endpoint templates
- completion.py: Callback-style delivery of operation results
- core/: Types and exceptions

Quick Start:
    from blockstack_client import BlockstackClient, initialize

    initialize(app_id="my-app-id", app_secret="my-app-secret")

    async with BlockstackClient() as client:
        users = await client.lookup_users(["muneeb"])
"""

__version__ = "0.1.0"
__author__ = "Blockstack Team"

# Core types
from blockstack_client.core.types import (
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

# Exceptions
from blockstack_client.core.exceptions import (
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

# Configuration
from blockstack_client.credentials import Credentials, initialize, get_default_credentials
from blockstack_client.endpoints import Endpoints, DEFAULT_ENDPOINTS

# Client
from blockstack_client.client import BlockstackClient
from blockstack_client.completion import deliver

__all__ = [
    # Version
    "__version__",
    # Core Types
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
    # Exceptions
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
    # Configuration
    "Credentials",
    "initialize",
    "get_default_credentials",
    "Endpoints",
    "DEFAULT_ENDPOINTS",
    # Client
    "BlockstackClient",
    "deliver",
]
