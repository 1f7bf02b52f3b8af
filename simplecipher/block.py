"""String ciphers: AES-CBC and the stream modes adapted to strings.

Every cipher here encrypts a str (or bytes) to a codec-encoded str and
decrypts it back. The codec is the one given to the constructor, or the
configured default (hex) when none is given.

Available modes are CBC, CFB, OFB and CTR. See aead.py for GCM.
"""
from __future__ import annotations

import io
from typing import Protocol, runtime_checkable

from . import primitives, pkcs7
from .config import CodecMixin
from .encoding import StringCodec
from .errors import PlaintextSizeError, CiphertextTooShortError, CiphertextSizeError
from .keys import Key, BLOCK_SIZE, RandomIV, new_aes_key
from .primitives import Direction
from .stream import (
    Stream,
    new_cfb_stream,
    new_ofb_stream,
    new_ctr_stream,
    simple_cfb_stream,
    simple_ofb_stream,
    simple_ctr_stream,
)
from .utils import as_bytes_utf8, bytes_to_str_utf8, guarded


@runtime_checkable
class Cipher(Protocol):
    def encrypt(self, plaintext: str | bytes) -> str: ...

    def decrypt(self, ciphertext: str) -> str: ...


class CBC(CodecMixin):
    """
    AES-CBC over block-aligned plaintext.

    The IV is prepended to the ciphertext as its first block. On decryption
    the first block is taken as the IV and the instance IV is ignored.

    :param key: AES key (16, 24 or 32 bytes)
    :param iv: IV of BLOCK_SIZE bytes
    :param codec: Ciphertext string codec, or None for the configured default

    :exception PlaintextSizeError: plaintext is not a multiple of BLOCK_SIZE
    :exception CiphertextTooShortError: ciphertext is shorter than one block
    :exception CiphertextSizeError: ciphertext is not a multiple of BLOCK_SIZE
    :exception KeyConstructionError: the key length is invalid
    :exception IVSizeError: the IV length is invalid
    :exception CodecError: the ciphertext string cannot be decoded
    """

    def __init__(self, key: Key, iv: Key, codec: StringCodec | None = None) -> None:
        self.key = key
        self.iv = iv
        self._codec = codec

    @guarded
    def encrypt(self, plaintext: str | bytes) -> str:
        return self.codec.encode_to_string(self._encrypt_bytes(as_bytes_utf8(plaintext)))

    @guarded
    def decrypt(self, ciphertext: str) -> str:
        return bytes_to_str_utf8(self._decrypt_bytes(self.codec.decode_string(ciphertext)))

    def _encrypt_bytes(self, plaintext: bytes) -> bytes:
        # CBC works on whole blocks; padding is the caller's job (see SimpleCBC)
        if len(plaintext) % BLOCK_SIZE != 0:
            raise PlaintextSizeError(f"plaintext length {len(plaintext)} is not a multiple of the block size")

        key = bytes(self.key)
        iv = bytes(self.iv)
        mode = primitives.cbc(key, iv, Direction.ENCRYPT)
        return iv + mode.update(plaintext) + mode.finalize()

    def _decrypt_bytes(self, ciphertext: bytes) -> bytes:
        key = bytes(self.key)
        primitives.new_block_cipher(key)

        if len(ciphertext) < BLOCK_SIZE:
            raise CiphertextTooShortError("ciphertext too short")
        if len(ciphertext) % BLOCK_SIZE != 0:
            raise CiphertextSizeError("ciphertext is not a multiple of the block size")

        iv, body = ciphertext[:BLOCK_SIZE], ciphertext[BLOCK_SIZE:]
        mode = primitives.cbc(key, iv, Direction.DECRYPT)
        return mode.update(body) + mode.finalize()


class SimpleCBC:
    """CBC with a passphrase-derived AES-256 key, random IVs and PKCS#7 padding."""

    def __init__(self, cbc: CBC) -> None:
        self.cbc = cbc

    @property
    def codec(self) -> StringCodec:
        return self.cbc.codec

    @guarded
    def encrypt(self, plaintext: str | bytes) -> str:
        padded = pkcs7.pad(BLOCK_SIZE, as_bytes_utf8(plaintext))
        return self.codec.encode_to_string(self.cbc._encrypt_bytes(padded))

    @guarded
    def decrypt(self, ciphertext: str) -> str:
        padded = self.cbc._decrypt_bytes(self.codec.decode_string(ciphertext))
        return bytes_to_str_utf8(pkcs7.unpad(BLOCK_SIZE, padded))


class StreamToBlock(CodecMixin):
    """
    Adapts a Stream to the string Cipher interface.

    The plaintext is streamed from an in-memory buffer into another one, and
    the resulting raw bytes go through the codec once.
    """

    def __init__(self, stream: Stream, codec: StringCodec | None = None) -> None:
        self.stream = stream
        self._codec = codec

    def __repr__(self) -> str:
        return f"StreamToBlock({self.stream!r})"

    @guarded
    def encrypt(self, plaintext: str | bytes) -> str:
        sink = io.BytesIO()
        self.stream.encrypt_stream(io.BytesIO(as_bytes_utf8(plaintext)), sink)
        return self.codec.encode_to_string(sink.getvalue())

    @guarded
    def decrypt(self, ciphertext: str) -> str:
        source = io.BytesIO(self.codec.decode_string(ciphertext))
        sink = io.BytesIO()
        self.stream.decrypt_stream(source, sink)
        return bytes_to_str_utf8(sink.getvalue())


def new_cbc(key: Key, iv: Key, *, codec: StringCodec | None = None) -> CBC:
    """
    Create an AES-CBC cipher with the given key and IV.

    It is the caller's responsibility to ensure that:

    - the key is 16, 24 or 32 bytes long (AES-128, AES-192 or AES-256),
    - the IV is BLOCK_SIZE bytes long,
    - the plaintext is padded to a multiple of BLOCK_SIZE.

    Use simple_cbc if you are not familiar with these.
    """
    return CBC(key, iv, codec)


def simple_cbc(key_passphrase: str, *, salt: str | None = None, codec: StringCodec | None = None) -> SimpleCBC:
    """
    Create an AES-256-CBC cipher from an arbitrary passphrase.

    The key is derived from the passphrase with scrypt. Each encryption uses
    a fresh random IV, prepended to the ciphertext, and pads the plaintext
    with PKCS#7.
    """
    return SimpleCBC(CBC(new_aes_key(key_passphrase, salt=salt), RandomIV(), codec))


def new_cfb(key: Key, iv: Key, *, codec: StringCodec | None = None) -> StreamToBlock:
    """Create an AES-CFB string cipher. The IV is prepended to the ciphertext."""
    return StreamToBlock(new_cfb_stream(key, iv), codec)


def simple_cfb(key_passphrase: str, *, salt: str | None = None,
               codec: StringCodec | None = None) -> StreamToBlock:
    """Create an AES-256-CFB string cipher from a passphrase, with a fresh random IV per encryption."""
    return StreamToBlock(simple_cfb_stream(key_passphrase, salt=salt), codec)


def new_ofb(key: Key, iv: Key, *, codec: StringCodec | None = None) -> StreamToBlock:
    """Create an AES-OFB string cipher. The IV is prepended to the ciphertext."""
    return StreamToBlock(new_ofb_stream(key, iv), codec)


def simple_ofb(key_passphrase: str, *, salt: str | None = None,
               codec: StringCodec | None = None) -> StreamToBlock:
    """Create an AES-256-OFB string cipher from a passphrase, with a fresh random IV per encryption."""
    return StreamToBlock(simple_ofb_stream(key_passphrase, salt=salt), codec)


def new_ctr(key: Key, iv: Key, *, codec: StringCodec | None = None) -> StreamToBlock:
    """Create an AES-CTR string cipher. The IV is prepended to the ciphertext."""
    return StreamToBlock(new_ctr_stream(key, iv), codec)


def simple_ctr(key_passphrase: str, *, salt: str | None = None,
               codec: StringCodec | None = None) -> StreamToBlock:
    """Create an AES-256-CTR string cipher from a passphrase, with a fresh random IV per encryption."""
    return StreamToBlock(simple_ctr_stream(key_passphrase, salt=salt), codec)
