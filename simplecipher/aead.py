"""AES-GCM authenticated encryption with the standard 12-byte nonce and 16-byte tag.

Unlike the other modes the nonce is NOT embedded in the ciphertext: keep it
and pass the same nonce to decrypt. Never encrypt two different plaintexts
with the same (key, nonce) pair; doing so breaks both confidentiality and
integrity of GCM.
"""
from __future__ import annotations

import logging
import warnings

from cryptography.exceptions import InvalidTag

from . import primitives
from .config import CodecMixin
from .encoding import StringCodec
from .errors import AuthenticationError, IVSizeError, NonceReuseWarning
from .keys import Key, NONCE_SIZE, new_aes_key, new_nonce
from .utils import as_bytes_utf8, bytes_to_str_utf8, guarded

logger = logging.getLogger(__name__)


class GCM(CodecMixin):
    """
    AES-GCM without associated data.

    :param key: AES key (16, 24 or 32 bytes)
    :param nonce: Nonce, 12 bytes
    :param codec: Ciphertext string codec, or None for the configured default

    :exception KeyConstructionError: Raised when the key length is invalid
    :exception IVSizeError: Raised when the primitive rejects the nonce length
    :exception AuthenticationError: Raised when the tag does not verify during decryption
    :exception CodecError: Raised when the ciphertext string cannot be decoded
    """

    def __init__(self, key: Key, nonce: Key, codec: StringCodec | None = None) -> None:
        self.key = key
        self.nonce = nonce
        self._codec = codec

    @guarded
    def encrypt(self, plaintext: str | bytes) -> str:
        aesgcm = primitives.gcm(bytes(self.key))
        nonce = bytes(self.nonce)
        try:
            sealed = aesgcm.encrypt(nonce, as_bytes_utf8(plaintext), None)
        except ValueError as e:
            raise IVSizeError(f"invalid GCM nonce of {len(nonce)} bytes: {e}") from e
        return self.codec.encode_to_string(sealed)

    @guarded
    def decrypt(self, ciphertext: str) -> str:
        sealed = self.codec.decode_string(ciphertext)
        aesgcm = primitives.gcm(bytes(self.key))
        nonce = bytes(self.nonce)
        try:
            plaintext = aesgcm.decrypt(nonce, sealed, None)
        except InvalidTag as e:
            raise AuthenticationError("message authentication failed") from e
        except ValueError as e:
            raise IVSizeError(f"invalid GCM nonce of {len(nonce)} bytes: {e}") from e
        return bytes_to_str_utf8(plaintext)


def new_gcm(key: Key, nonce: Key, *, codec: StringCodec | None = None) -> GCM:
    """
    Create an AES-GCM cipher with the given key and nonce.

    It is the caller's responsibility to pass a 16 or 32 byte key and a
    12 byte nonce, and to never reuse a nonce with the same key.
    """
    return GCM(key, nonce, codec)


def simple_gcm(key_passphrase: str, nonce_passphrase: str, *, salt: str | None = None,
               codec: StringCodec | None = None) -> GCM:
    """
    Create an AES-256-GCM cipher whose key and nonce are derived from passphrases.

    The nonce is a pure function of ``nonce_passphrase``, so every message
    encrypted by this cipher uses the same nonce. Change ``nonce_passphrase``
    for every message (a counter or timestamp works) and keep it for
    decryption. A NonceReuseWarning is issued as a reminder.

    Ciphertexts are only readable by simple_gcm with the same passphrases
    and salt; the key derivation is specific to this package.
    """
    warnings.warn(
        "simple_gcm uses one deterministic nonce for every message; "
        "use a distinct nonce_passphrase per message",
        NonceReuseWarning,
        stacklevel=2,
    )
    logger.debug("simple_gcm: deriving AES-256 key and %d-byte nonce", NONCE_SIZE)
    return GCM(new_aes_key(key_passphrase, salt=salt), new_nonce(nonce_passphrase, salt=salt), codec)
