"""Blockstack registry client.

Async client for the Onename/Blockstack registry API. Every operation is a
single authenticated GET whose JSON body is returned as-is.

Features:
- User lookup, search and registry-wide enumeration
- Address queries (unspent outputs, owned names)
- Domain DKIM public key lookup
- Callback-style delivery through ``submit``
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional
from urllib.parse import quote

import httpx

from .completion import deliver
from .credentials import Credentials, get_default_credentials
from .endpoints import DEFAULT_ENDPOINTS, Endpoints
from .core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    EmptyResponseError,
    NotFoundError,
    ParseError,
    ProtocolError,
    TransportError,
    ValidationError,
)
from .core.types import (
    AllUsersResponse,
    ClientConfig,
    DKIMPublicKey,
    LookupResponse,
    RegistryRequest,
    RegistryResult,
    SearchResponse,
    UnspentOutput,
)
from .utils.config import DEFAULT_TIMEOUT
from .utils.logger import get_logger

logger = get_logger("client")

NOT_CONFIGURED_MESSAGE = "Client is not configured. Did you forget to initialize the client?"

# Operations that can be scheduled through ``submit``
OPERATIONS = (
    "lookup_users",
    "search",
    "list_all_users",
    "unspent_outputs",
    "names_owned_by_address",
    "dkim_public_key_for_domain",
)


def _segment(value: str) -> str:
    """Percent-encode one URL path segment."""
    return quote(value, safe="")


class BlockstackClient:
    """Client for the Blockstack identity registry.

    Example:
        >>> from blockstack_client import BlockstackClient, Credentials
        >>>
        >>> async with BlockstackClient(Credentials("app-id", "app-secret")) as client:
        ...     users = await client.lookup_users(["muneeb", "fredwilson"])
        ...     print(users["muneeb"]["profile"])
        ...
        ...     results = await client.search("twitter:itsProf")
        ...     print(len(results["results"]))
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        endpoints: Optional[Endpoints] = None,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client.

        Args:
            credentials: App credentials; when omitted the process-wide pair
                set through ``initialize`` is read on every request
            endpoints: Endpoint templates (default: public Onename API)
            timeout: Request timeout in seconds
            http_client: Pre-built HTTP client; it is not closed by ``close``
        """
        self._credentials = credentials
        self.endpoints = endpoints or DEFAULT_ENDPOINTS
        self.timeout = timeout
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> "BlockstackClient":
        """Build a client from a ``ClientConfig``."""
        credentials = None
        if config.app_id is not None or config.app_secret is not None:
            credentials = Credentials(app_id=config.app_id, app_secret=config.app_secret)
        return cls(
            credentials=credentials,
            endpoints=Endpoints.from_base_url(config.base_url),
            timeout=config.timeout,
            **kwargs,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "BlockstackClient":
        """Build a client from BLOCKSTACK_* environment variables."""
        return cls.from_config(ClientConfig.from_env(), **kwargs)

    async def __aenter__(self) -> "BlockstackClient":
        """Async context manager entry."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get HTTP client, creating if needed."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_http_client = True
        return self._http_client

    async def close(self):
        """Close the client and release resources."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    # ============================================================
    # Configuration
    # ============================================================

    @property
    def credentials(self) -> Optional[Credentials]:
        if self._credentials is not None:
            return self._credentials
        return get_default_credentials()

    def is_configured(self) -> bool:
        """True iff both app id and app secret are set."""
        credentials = self.credentials
        return credentials is not None and credentials.is_valid

    def authorization_header_value(self) -> Optional[str]:
        """Return the ``Authorization`` header value, or None when unconfigured."""
        credentials = self.credentials
        if credentials is None or not credentials.is_valid:
            logger.warning(NOT_CONFIGURED_MESSAGE)
            return None
        return credentials.basic_auth_value()

    # ============================================================
    # Request building
    # ============================================================

    def lookup_url(self, usernames: Iterable[str]) -> str:
        if isinstance(usernames, str):
            raise ValidationError("usernames must be a non-empty list of strings")
        usernames = list(usernames)
        if not usernames:
            raise ValidationError("usernames must be a non-empty list of strings")
        for username in usernames:
            if not isinstance(username, str) or not username:
                raise ValidationError(
                    "usernames must be non-empty strings",
                    details={"username": username},
                )
        joined = ",".join(_segment(username) for username in usernames)
        return f"{self.endpoints.lookup}/{joined}"

    def search_url(self, query: str) -> str:
        if not isinstance(query, str):
            raise ValidationError("query must be a string")
        return f"{self.endpoints.search}{_segment(query)}"

    def all_users_url(self) -> str:
        return self.endpoints.all_users

    def unspent_outputs_url(self, address: str) -> str:
        return f"{self.endpoints.addresses}/{_segment(self._require('address', address))}/unspents"

    def names_owned_url(self, address: str) -> str:
        return f"{self.endpoints.addresses}/{_segment(self._require('address', address))}/names"

    def dkim_url(self, domain: str) -> str:
        return f"{self.endpoints.domains}/{_segment(self._require('domain', domain))}/dkim"

    @staticmethod
    def _require(name: str, value: str) -> str:
        if not isinstance(value, str) or not value:
            raise ValidationError(f"{name} must be a non-empty string", details={name: value})
        return value

    def build_request(
        self,
        operation: str,
        url: str,
        credentials: Optional[Credentials] = None,
    ) -> RegistryRequest:
        """Attach credentials to a GET request for ``url``.

        Args:
            operation: Operation name, for logging and errors
            url: Fully built request URL
            credentials: Pair to sign with (default: ``self.credentials``)

        Raises:
            ConfigurationError: If credentials are not configured
        """
        if credentials is None:
            credentials = self.credentials
        if credentials is None or not credentials.is_valid:
            logger.warning(NOT_CONFIGURED_MESSAGE, operation=operation)
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE, details={"operation": operation})
        return RegistryRequest(
            operation=operation,
            url=url,
            headers={"Authorization": credentials.basic_auth_value()},
        )

    # ============================================================
    # Execution
    # ============================================================

    async def _get(self, operation: str, url_factory: Callable[[], str]) -> Any:
        """Check configuration, build the request, execute it and interpret the response."""
        # One read, so the checked pair is the pair that signs the request
        credentials = self.credentials
        if credentials is None or not credentials.is_valid:
            logger.warning(NOT_CONFIGURED_MESSAGE, operation=operation)
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE, details={"operation": operation})

        request = self.build_request(operation, url_factory(), credentials)
        logger.debug(f"{request.method} {request.url}", operation=operation)

        try:
            response = await self.http_client.request(
                request.method,
                request.url,
                headers=request.headers,
            )
        except httpx.DecodingError as e:
            logger.error(
                f"{operation} returned an undecodable body",
                exc_info=True,
                operation=operation,
                url=request.url,
            )
            raise ParseError(
                f"Could not decode response from {request.url}: {e}",
                url=request.url,
                details={"operation": operation},
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                f"{operation} failed: transport error: {e}",
                exc_info=True,
                operation=operation,
                url=request.url,
            )
            raise TransportError(
                f"Request to {request.url} failed: {e}",
                url=request.url,
                details={"operation": operation},
            ) from e

        return self._interpret(operation, request.url, response)

    def _interpret(self, operation: str, url: str, response: httpx.Response) -> Any:
        """Map a response to its parsed JSON body or a typed error."""
        body = response.text
        payload = None
        decode_error: Optional[json.JSONDecodeError] = None
        if body.strip():
            try:
                payload = json.loads(body)
            except json.JSONDecodeError as e:
                decode_error = e

        if not response.is_success:
            status = response.status_code
            logger.warning(
                f"{operation} returned HTTP {status}",
                operation=operation,
                status_code=status,
                url=url,
            )
            if status in (401, 403):
                error_cls = AuthenticationError
            elif status == 404:
                error_cls = NotFoundError
            else:
                error_cls = ProtocolError
            raise error_cls(status_code=status, body=body, url=url, payload=payload)

        if decode_error is not None:
            logger.error(
                f"{operation} returned malformed JSON: {decode_error}",
                exc_info=decode_error,
                operation=operation,
                url=url,
            )
            raise ParseError(
                f"Invalid JSON from {url}: {decode_error}",
                body=body,
                url=url,
            ) from decode_error

        if payload is None and not body.strip():
            logger.error(f"{operation} returned an empty body", operation=operation, url=url)
            raise EmptyResponseError(url=url)

        return payload

    # ============================================================
    # User operations
    # ============================================================

    async def lookup_users(self, usernames: Iterable[str]) -> LookupResponse:
        """Look up the data for one or more users by their usernames.

        Args:
            usernames: Username(s) to look up

        Returns:
            Object with a top-level key per username, each holding a
            "profile" and a "verifications" field
        """
        return await self._get("lookup_users", lambda: self.lookup_url(usernames))

    async def search(self, query: str) -> SearchResponse:
        """Search the registry.

        The query is matched against usernames, full names and twitter
        handles by default. Verified accounts can be searched explicitly
        with queries like ``twitter:itsProf``, ``facebook:g3lepage``,
        ``github:shea256`` or ``domain:muneebali.com``.

        Returns:
            Results, where each result has a "profile" object
        """
        return await self._get("search", lambda: self.search_url(query))

    async def list_all_users(self) -> AllUsersResponse:
        """Return "stats" (running "registrations" count) and all "usernames"."""
        return await self._get("list_all_users", self.all_users_url)

    async def register_user(self, username: str, recipient_address: str, profile: Dict[str, Any]):
        """Reserved: user registration is not supported by this client."""
        raise NotImplementedError("register_user is not supported by this client")

    async def update_user(self, username: str, profile: Dict[str, Any], owner_pubkey: str):
        """Reserved: profile updates are not supported by this client."""
        raise NotImplementedError("update_user is not supported by this client")

    async def transfer_user(self, username: str, transfer_address: str, owner_pubkey: str):
        """Reserved: name transfers are not supported by this client."""
        raise NotImplementedError("transfer_user is not supported by this client")

    # ============================================================
    # Transaction operations
    # ============================================================

    async def broadcast_transaction(self, signed_hex: str):
        """Reserved: transaction broadcast is not supported by this client."""
        raise NotImplementedError("broadcast_transaction is not supported by this client")

    # ============================================================
    # Address operations
    # ============================================================

    async def unspent_outputs(self, address: str) -> List[UnspentOutput]:
        """Retrieve the unspent outputs of an address, for building transactions."""
        return await self._get("unspent_outputs", lambda: self.unspent_outputs_url(address))

    async def names_owned_by_address(self, address: str) -> List[str]:
        """Retrieve the names owned by an address."""
        return await self._get("names_owned_by_address", lambda: self.names_owned_url(address))

    # ============================================================
    # Domain operations
    # ============================================================

    async def dkim_public_key_for_domain(self, domain: str) -> DKIMPublicKey:
        """Retrieve the DKIM public key of a domain.

        The key comes from the "blockchainid._domainkey" subdomain DNS record.
        """
        return await self._get("dkim_public_key_for_domain", lambda: self.dkim_url(domain))

    # ============================================================
    # Callback delivery
    # ============================================================

    def submit(
        self,
        operation: str,
        *args,
        completion: Callable[[Any, Optional[Exception]], Optional[Awaitable[None]]],
    ) -> "asyncio.Task[RegistryResult]":
        """Schedule an operation and hand its outcome to ``completion``.

        ``completion(payload, error)`` is called exactly once, including when
        the client is not configured. Must be called from a running event loop.

        Example:
            >>> def on_done(payload, error):
            ...     print(payload if error is None else error)
            >>> task = client.submit("lookup_users", ["muneeb"], completion=on_done)
        """
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")
        method = getattr(self, operation)
        return asyncio.get_running_loop().create_task(deliver(method(*args), completion))
