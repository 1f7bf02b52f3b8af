"""AES stream cipher modes over binary file-like objects.

Available modes are:

- CFB (Cipher Feedback)
- OFB (Output Feedback)
- CTR (Counter)

Encryption writes the IV to the sink, followed by the ciphertext. Decryption
reads the first BLOCK_SIZE bytes from the source as the IV. Nothing is
encoded: both sides are raw bytes.
"""
from __future__ import annotations

import logging
from typing import BinaryIO, Callable, Protocol, runtime_checkable

from cryptography.hazmat.primitives.ciphers import CipherContext

from . import primitives
from .errors import CopyError
from .keys import Key, BLOCK_SIZE, RandomIV, new_aes_key
from .primitives import Direction
from .utils import guarded

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 32 * 1024

StreamBuilder = Callable[[bytes, bytes, Direction], CipherContext]


@runtime_checkable
class Stream(Protocol):
    def encrypt_stream(self, plaintext: BinaryIO, ciphertext: BinaryIO) -> None: ...

    def decrypt_stream(self, ciphertext: BinaryIO, plaintext: BinaryIO) -> None: ...


class StreamCipher:
    """
    An AES stream mode working on readers and writers.

    Which mode it is depends on ``builder``: primitives.cfb, primitives.ofb or
    primitives.ctr. Use the new_*_stream / simple_*_stream constructors.

    :param key: AES key (16, 24 or 32 bytes)
    :param iv: IV of BLOCK_SIZE bytes, used for encryption only
    :param builder: Maps (key, iv, direction) to a keystream context

    :exception KeyConstructionError: Raised when the key length is invalid
    :exception IVSizeError: Raised when the IV length is invalid
    :exception CopyError: Raised when reading the source or writing the sink fails,
        or when the ciphertext is shorter than one IV
    """

    def __init__(self, key: Key, iv: Key, builder: StreamBuilder, name: str = "stream") -> None:
        self.key = key
        self.iv = iv
        self.builder = builder
        self.name = name

    def __repr__(self) -> str:
        return f"StreamCipher({self.name})"

    @guarded
    def encrypt_stream(self, plaintext: BinaryIO, ciphertext: BinaryIO) -> None:
        """Encrypt everything read from plaintext into ciphertext, prefixed with the IV."""
        key = bytes(self.key)
        iv = bytes(self.iv)
        stream = self.builder(key, iv, Direction.ENCRYPT)

        _write(ciphertext, iv)
        written = _copy(plaintext, ciphertext, stream)
        logger.debug("%s: encrypted %d bytes", self.name, written)

    @guarded
    def decrypt_stream(self, ciphertext: BinaryIO, plaintext: BinaryIO) -> None:
        """Decrypt raw ciphertext (IV first) into plaintext. The instance IV is ignored."""
        key = bytes(self.key)
        iv = _read_full(ciphertext, BLOCK_SIZE)
        stream = self.builder(key, iv, Direction.DECRYPT)

        written = _copy(ciphertext, plaintext, stream)
        logger.debug("%s: decrypted %d bytes", self.name, written)


def _read(source: BinaryIO, size: int) -> bytes:
    try:
        return source.read(size) or b""
    except Exception as e:
        raise CopyError(f"copy error: read failed: {e}") from e


def _write(sink: BinaryIO, data: bytes) -> None:
    if not data:
        return
    try:
        sink.write(data)
    except Exception as e:
        raise CopyError(f"copy error: write failed: {e}") from e


def _read_full(source: BinaryIO, size: int) -> bytes:
    buf = bytearray()
    while len(buf) < size:
        chunk = _read(source, size - len(buf))
        if not chunk:
            raise CopyError(f"copy error: expected {size} IV bytes, got {len(buf)}")
        buf.extend(chunk)
    return bytes(buf)


def _copy(source: BinaryIO, sink: BinaryIO, stream: CipherContext) -> int:
    total = 0
    while True:
        chunk = _read(source, COPY_CHUNK_SIZE)
        if not chunk:
            break
        _write(sink, stream.update(chunk))
        total += len(chunk)
    _write(sink, stream.finalize())
    return total


def new_cfb_stream(key: Key, iv: Key) -> StreamCipher:
    """
    Create an AES-CFB stream cipher with the given key and IV.

    It is the caller's responsibility to pass a 16, 24 or 32 byte key and a
    BLOCK_SIZE IV. Use simple_cfb_stream if you are not sure.
    """
    return StreamCipher(key, iv, primitives.cfb, "cfb")


def new_ofb_stream(key: Key, iv: Key) -> StreamCipher:
    """Create an AES-OFB stream cipher with the given key and IV."""
    return StreamCipher(key, iv, primitives.ofb, "ofb")


def new_ctr_stream(key: Key, iv: Key) -> StreamCipher:
    """Create an AES-CTR stream cipher with the given key and IV."""
    return StreamCipher(key, iv, primitives.ctr, "ctr")


def simple_cfb_stream(key_passphrase: str, *, salt: str | None = None) -> StreamCipher:
    """
    Create an AES-256-CFB stream cipher from a passphrase.

    The key is derived with scrypt; every encryption draws a fresh random IV.
    """
    return new_cfb_stream(new_aes_key(key_passphrase, salt=salt), RandomIV())


def simple_ofb_stream(key_passphrase: str, *, salt: str | None = None) -> StreamCipher:
    """Create an AES-256-OFB stream cipher from a passphrase, with a fresh random IV per encryption."""
    return new_ofb_stream(new_aes_key(key_passphrase, salt=salt), RandomIV())


def simple_ctr_stream(key_passphrase: str, *, salt: str | None = None) -> StreamCipher:
    """Create an AES-256-CTR stream cipher from a passphrase, with a fresh random IV per encryption."""
    return new_ctr_stream(new_aes_key(key_passphrase, salt=salt), RandomIV())
