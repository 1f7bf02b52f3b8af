"""String codecs for ciphertexts.

A codec turns the raw ciphertext bytes produced by a cipher into a string
and back. Available codecs:

- NOP_CODEC: no encoding, bytes map 1:1 onto latin-1 characters
- HEX_CODEC: lowercase hexadecimal
- BASE64_STD_CODEC / BASE64_URL_CODEC: base64 with '=' padding
- BASE32_STD_CODEC / BASE32_HEX_CODEC: base32 with '=' padding
"""
from __future__ import annotations

import base64
import binascii
from typing import Callable, Protocol, runtime_checkable

from .errors import CodecError


@runtime_checkable
class StringCodec(Protocol):
    def encode_to_string(self, src: bytes) -> str: ...

    def decode_string(self, text: str) -> bytes: ...


class NopCodec:
    """Does not encode; converts between bytes and str one character per byte."""

    name = "nop"

    def encode_to_string(self, src: bytes) -> str:
        return bytes(src).decode("latin-1")

    def decode_string(self, text: str) -> bytes:
        if not isinstance(text, str):
            raise TypeError("decode_string expects a str")
        try:
            return text.encode("latin-1")
        except UnicodeEncodeError as e:
            raise CodecError(f"invalid raw ciphertext string: {e}") from e


class HexCodec:
    name = "hex"

    def encode_to_string(self, src: bytes) -> str:
        return bytes(src).hex()

    def decode_string(self, text: str) -> bytes:
        if not isinstance(text, str):
            raise TypeError("decode_string expects a str")
        try:
            return binascii.unhexlify(text)
        except (binascii.Error, ValueError) as e:
            raise CodecError(f"invalid hex string: {e}") from e


class BinasciiCodec:
    """Codec over a pair of base64-module functions (base64 or base32 family)."""

    def __init__(self, name: str, encoder: Callable[[bytes], bytes], decoder: Callable[..., bytes],
                 strict: bool = False) -> None:
        self.name = name
        self._encoder = encoder
        self._decoder = decoder
        self._strict = strict

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def encode_to_string(self, src: bytes) -> str:
        return self._encoder(bytes(src)).decode("ascii")

    def decode_string(self, text: str) -> bytes:
        if not isinstance(text, str):
            raise TypeError("decode_string expects a str")
        try:
            if self._strict:
                return self._decoder(text, validate=True)
            return self._decoder(text)
        except (binascii.Error, ValueError) as e:
            raise CodecError(f"invalid {self.name} string: {e}") from e


def _b64url_decode(text: str) -> bytes:
    # urlsafe_b64decode silently drops characters outside the alphabet
    return base64.b64decode(text, altchars=b"-_", validate=True)


NOP_CODEC: StringCodec = NopCodec()
HEX_CODEC: StringCodec = HexCodec()
BASE64_STD_CODEC: StringCodec = BinasciiCodec("base64", base64.b64encode, base64.b64decode, strict=True)
BASE64_URL_CODEC: StringCodec = BinasciiCodec("base64url", base64.urlsafe_b64encode, _b64url_decode)
BASE32_STD_CODEC: StringCodec = BinasciiCodec("base32", base64.b32encode, base64.b32decode)
BASE32_HEX_CODEC: StringCodec = BinasciiCodec("base32hex", base64.b32hexencode, base64.b32hexdecode)

CODECS: dict[str, StringCodec] = {
    "nop": NOP_CODEC,
    "hex": HEX_CODEC,
    "base64": BASE64_STD_CODEC,
    "base64url": BASE64_URL_CODEC,
    "base32": BASE32_STD_CODEC,
    "base32hex": BASE32_HEX_CODEC,
}


def get_codec(name: str) -> StringCodec:
    """Look up a codec by its name (case-insensitive)."""
    try:
        return CODECS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown codec {name!r}, expected one of {', '.join(CODECS)}") from None
