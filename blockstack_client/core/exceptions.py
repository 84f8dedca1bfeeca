"""Custom exceptions for the Blockstack client.

This module defines a hierarchical exception structure for better error handling.
Every error carries a machine-readable ``code`` and a ``details`` dict, and
errors raised for an issued request also carry whatever body the registry sent
back, so callers never lose a partial result.
"""
from typing import Any, Dict, Optional


class BlockstackError(Exception):
    """Base exception for all Blockstack client errors.

    Args:
        message: Human readable description
        code: Machine readable error code
        details: Additional structured context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "BLOCKSTACK_ERROR"
        self.details: Dict[str, Any] = dict(details or {})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigurationError(BlockstackError):
    """Raised when the client is used before credentials are configured."""

    def __init__(self, message: str = "Configuration error", code: str = "CONFIG_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class ValidationError(BlockstackError):
    """Raised when caller input is rejected before a request is issued."""

    def __init__(self, message: str = "Validation error", code: str = "VALIDATION_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class RegistryError(BlockstackError):
    """Raised when an issued registry request does not yield a usable result.

    Args:
        message: Human readable description
        url: Request URL
        payload: Parsed response body, if one was received and parsed
    """

    def __init__(
        self,
        message: str = "Registry error",
        code: str = "REGISTRY_ERROR",
        url: Optional[str] = None,
        payload: Any = None,
        **kwargs,
    ):
        super().__init__(message, code=code, **kwargs)
        self.url = url
        self.payload = payload
        if url:
            self.details["url"] = url


class TransportError(RegistryError):
    """Raised for network-level failures (DNS, TLS, connection reset, timeout)."""

    def __init__(self, message: str = "Transport error", code: str = "TRANSPORT_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class ProtocolError(RegistryError):
    """Raised when the registry answers with a non-2xx status.

    Args:
        status_code: HTTP status code of the response
        body: Raw response text
    """

    def __init__(
        self,
        status_code: int,
        message: Optional[str] = None,
        code: str = "PROTOCOL_ERROR",
        body: Optional[str] = None,
        **kwargs,
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Registry returned HTTP {status_code}", code=code, **kwargs)
        self.details["status_code"] = status_code


class AuthenticationError(ProtocolError):
    """Raised when the registry rejects the app credentials (401/403)."""

    def __init__(self, status_code: int = 401, code: str = "AUTH_ERROR", **kwargs):
        kwargs.setdefault("message", f"Registry rejected the app credentials (HTTP {status_code})")
        super().__init__(status_code, code=code, **kwargs)


class NotFoundError(ProtocolError):
    """Raised when the requested resource does not exist (404)."""

    def __init__(self, status_code: int = 404, code: str = "NOT_FOUND", **kwargs):
        kwargs.setdefault("message", "Registry resource not found")
        super().__init__(status_code, code=code, **kwargs)


class ParseError(RegistryError):
    """Raised when a successful response body is not valid JSON.

    Args:
        body: Raw response text
    """

    def __init__(
        self,
        message: str = "Response body is not valid JSON",
        code: str = "PARSE_ERROR",
        body: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, code=code, **kwargs)
        self.body = body


class EmptyResponseError(ParseError):
    """Raised when a successful response carries no body at all."""

    def __init__(self, message: str = "Response body is empty", code: str = "EMPTY_RESPONSE", **kwargs):
        super().__init__(message, code=code, body="", **kwargs)


__all__ = [
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
