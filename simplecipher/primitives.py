"""AES primitive and mode factories built on ``cryptography``.

Every factory validates its key (16, 24 or 32 bytes) and IV (BLOCK_SIZE
bytes) up front and raises KeyConstructionError / IVSizeError rather than
the library's ValueError.
"""
from __future__ import annotations

import enum

from cryptography.hazmat.primitives.ciphers import Cipher, CipherContext, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

try:
    from cryptography.hazmat.decrepit.ciphers.modes import CFB, OFB
except ImportError:  # cryptography releases that still ship them under primitives
    from cryptography.hazmat.primitives.ciphers.modes import CFB, OFB

from .errors import KeyConstructionError, IVSizeError
from .keys import AES_KEY_SIZES, BLOCK_SIZE


class Direction(enum.Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


def new_block_cipher(key: bytes) -> algorithms.AES:
    """Create the AES block transform for key, selecting AES-128/192/256 by length."""
    if len(key) not in AES_KEY_SIZES:
        raise KeyConstructionError(f"invalid AES key length {len(key)}, expected one of {AES_KEY_SIZES}")
    try:
        return algorithms.AES(key)
    except ValueError as e:
        raise KeyConstructionError(str(e)) from e


def check_iv(iv: bytes) -> bytes:
    if len(iv) != BLOCK_SIZE:
        raise IVSizeError(f"IV must be exactly {BLOCK_SIZE} bytes long, got {len(iv)}")
    return iv


def _context(key: bytes, mode: modes.Mode, direction: Direction) -> CipherContext:
    cipher = Cipher(new_block_cipher(key), mode)
    if direction is Direction.ENCRYPT:
        return cipher.encryptor()
    if direction is Direction.DECRYPT:
        return cipher.decryptor()
    raise ValueError(f"invalid direction: {direction!r}")


def cbc(key: bytes, iv: bytes, direction: Direction) -> CipherContext:
    return _context(key, modes.CBC(check_iv(iv)), direction)


def cfb(key: bytes, iv: bytes, direction: Direction) -> CipherContext:
    # CFB feeds ciphertext back into the keystream, so the two directions differ
    return _context(key, CFB(check_iv(iv)), direction)


def ofb(key: bytes, iv: bytes, direction: Direction) -> CipherContext:
    return _context(key, OFB(check_iv(iv)), Direction.ENCRYPT)


def ctr(key: bytes, iv: bytes, direction: Direction) -> CipherContext:
    # the whole IV is used as a 128-bit big-endian counter
    return _context(key, modes.CTR(check_iv(iv)), Direction.ENCRYPT)


def gcm(key: bytes) -> AESGCM:
    """Create an AES-GCM AEAD with the standard 16-byte tag."""
    new_block_cipher(key)
    return AESGCM(key)
