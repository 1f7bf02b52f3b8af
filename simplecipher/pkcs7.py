"""PKCS#7 padding as described in RFC 5652 section 6.3."""
from .errors import (
    PaddingNotFoundError,
    PaddingNotAMultipleError,
    PaddingTooLongError,
    PaddingTooShortError,
    PaddingNotAllTheSameError,
)


def _check_block_size(n: int) -> None:
    if not isinstance(n, int) or n <= 1 or n >= 256:
        raise ValueError(f"block size must be an integer in [2, 255], got {n!r}")


def pad(n: int, data: bytes) -> bytes:
    """Pad data to a multiple of n bytes.

    Appends n - len(data) % n bytes, each holding that count. Data that is
    already aligned gets a full block of padding.
    """
    _check_block_size(n)
    length = n - len(data) % n
    return bytes(data) + bytes([length]) * length


def unpad(n: int, data: bytes) -> bytes:
    """Remove PKCS#7 padding added by pad.

    :exception PaddingNotFoundError: data is empty
    :exception PaddingNotAMultipleError: len(data) is not a multiple of n
    :exception PaddingTooLongError: the padding byte is greater than n
    :exception PaddingTooShortError: the padding byte is 0
    :exception PaddingNotAllTheSameError: the trailing bytes do not all equal the padding byte
    :exception ValueError: n outside [2, 255]
    """
    _check_block_size(n)
    if len(data) == 0:
        raise PaddingNotFoundError("bad PKCS#7 padding - no data")
    if len(data) % n != 0:
        raise PaddingNotAMultipleError("bad PKCS#7 padding - not a multiple of block size")
    length = data[-1]
    if length > n:
        raise PaddingTooLongError("bad PKCS#7 padding - too long")
    if length == 0:
        raise PaddingTooShortError("bad PKCS#7 padding - too short")
    if any(b != length for b in data[-length:]):
        raise PaddingNotAllTheSameError("bad PKCS#7 padding - not all the same")
    return bytes(data[:-length])
