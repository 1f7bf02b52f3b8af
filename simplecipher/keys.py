"""Key material for AES keys, IVs and nonces.

Everything a cipher needs apart from the plaintext/ciphertext is treated as a
key here. A key is any object that supports ``bytes(key)``. Different uses
require different lengths; use new_aes_key, new_nonce or new_iv to get the
right one.
"""
from __future__ import annotations

import logging
import random
import secrets
import time
from typing import Protocol, runtime_checkable

from .config import default_salt
from .kdf import derive_key

logger = logging.getLogger(__name__)

AES128 = 16
AES192 = 24
AES256 = 32
AES_KEY_SIZES = (AES128, AES192, AES256)

BLOCK_SIZE = 16
NONCE_SIZE = 12


@runtime_checkable
class Key(Protocol):
    def __bytes__(self) -> bytes: ...


class BytesKey:
    """Raw bytes used as a key as-is."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be a bytes-like object")
        self._data = bytes(data)

    def __repr__(self) -> str:
        return f"BytesKey(<{len(self._data)} bytes>)"

    def __bytes__(self) -> bytes:
        return self._data

    to_bytes = __bytes__


class StringKey:
    """A string used as a key; its bytes are the UTF-8 encoding."""

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError("text must be a str")
        self._text = text

    def __repr__(self) -> str:
        return f"StringKey(<{len(self._text)} chars>)"

    def __bytes__(self) -> bytes:
        return self._text.encode("utf-8")

    to_bytes = __bytes__


class KeyGen:
    """A key derived from a passphrase and salt with scrypt.

    The bytes are derived again on every access and never cached, which
    costs a few milliseconds each time. Keep the result of ``bytes(key)``
    if you need it repeatedly.

    :param passphrase: Any string, >= 32 bytes recommended.
    :param length: Output length in bytes; <= 0 yields b"".
    :param salt: Salt string, >= 8 bytes recommended.
    """

    def __init__(self, passphrase: str, length: int, salt: str) -> None:
        if not isinstance(passphrase, str):
            raise TypeError("passphrase must be a str")
        if not isinstance(salt, str):
            raise TypeError("salt must be a str")
        self.passphrase = passphrase
        self.length = int(length)
        self.salt = salt

    def __repr__(self) -> str:
        return f"KeyGen(length={self.length})"

    def __bytes__(self) -> bytes:
        return derive_key(self.passphrase, self.length, self.salt)

    to_bytes = __bytes__


class RandomIV:
    """An IV that is freshly drawn from the secure random source on every access."""

    def __repr__(self) -> str:
        return "RandomIV()"

    def __bytes__(self) -> bytes:
        return _random_iv_bytes()

    to_bytes = __bytes__


def new_key(passphrase: str, length: int, salt: str) -> KeyGen:
    """Derive a key of ``length`` bytes from the passphrase.

    Use new_aes_key, new_nonce or new_iv for specific key types.
    """
    return KeyGen(passphrase, length, salt)


def new_aes_key(passphrase: str, *, length: int = AES256, salt: str | None = None) -> KeyGen:
    """Derive an AES key from the passphrase.

    Lengths other than AES128, AES192 and AES256 fall back to AES256. The
    configured default salt is used when ``salt`` is None.
    """
    if length not in AES_KEY_SIZES:
        logger.debug("invalid AES key length %r, using %d", length, AES256)
        length = AES256
    return KeyGen(passphrase, length, default_salt() if salt is None else salt)


def new_nonce(passphrase: str, *, length: int = NONCE_SIZE, salt: str | None = None) -> KeyGen:
    """Derive an AEAD nonce (12 bytes by default) from the passphrase."""
    return KeyGen(passphrase, length, default_salt() if salt is None else salt)


def new_iv(passphrase: str, *, length: int = BLOCK_SIZE, salt: str | None = None) -> KeyGen:
    """Derive a block-size IV from the passphrase."""
    return KeyGen(passphrase, length, default_salt() if salt is None else salt)


def new_random_iv() -> BytesKey:
    """Create a random BLOCK_SIZE IV. Two calls return different bytes."""
    return BytesKey(_random_iv_bytes())


def _random_iv_bytes() -> bytes:
    try:
        return secrets.token_bytes(BLOCK_SIZE)
    except OSError as e:
        logger.warning("secure random source unavailable (%s); deriving IV from time and PRNG", e)
        return bytes(new_iv(f"{random.random()}{time.time_ns()}"))
