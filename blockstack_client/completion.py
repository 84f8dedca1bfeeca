"""Completion-callback delivery for registry operations."""
import inspect
from typing import Any, Awaitable, Callable, Optional

from .core.exceptions import BlockstackError
from .core.types import RegistryResult

Completion = Callable[[Any, Optional[Exception]], Optional[Awaitable[None]]]


async def deliver(operation: Awaitable[Any], completion: Completion) -> RegistryResult:
    """Await ``operation`` and call ``completion(payload, error)`` exactly once.

    On failure the payload is whatever body the registry sent back with the
    error (None if there was none). Exceptions that are not client errors
    propagate without invoking the completion.

    Args:
        operation: Awaitable registry operation
        completion: Sync or async callable taking ``(payload, error)``

    Returns:
        The delivered RegistryResult
    """
    try:
        payload = await operation
    except BlockstackError as e:
        result = RegistryResult(payload=getattr(e, "payload", None), error=e)
    else:
        result = RegistryResult(payload=payload)

    outcome = completion(result.payload, result.error)
    if inspect.isawaitable(outcome):
        await outcome
    return result
