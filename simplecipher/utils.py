import functools
import logging
from typing import Any, Callable, TypeVar

from .errors import SimpleCipherError, InternalFault

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def as_bytes_utf8(value: bytes | str) -> bytes:
    """Convert str to UTF-8 bytes; passthrough bytes-like.

    Lone surrogates produced by bytes_to_str_utf8 are mapped back to the
    original bytes.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8", errors="surrogateescape")
    raise TypeError("expected bytes-like or str")


def bytes_to_str_utf8(data: bytes | bytearray | memoryview) -> str:
    """Decode bytes to str. Invalid UTF-8 sequences survive as lone surrogates."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("expected bytes-like object")
    return bytes(data).decode("utf-8", errors="surrogateescape")


def guarded(func: F) -> F:
    """Wrap a public cipher operation so unexpected faults become InternalFault.

    SimpleCipherError subclasses pass through untouched; anything else is
    logged and re-raised as InternalFault chained to the original exception.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SimpleCipherError:
            raise
        except Exception as e:
            logger.debug("unexpected fault in %s", func.__qualname__, exc_info=True)
            raise InternalFault(f"{func.__qualname__}: {type(e).__name__}: {e}") from e

    return wrapper  # type: ignore[return-value]
