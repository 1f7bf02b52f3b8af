import hashlib
import logging
import time

from .errors import InternalFault

logger = logging.getLogger(__name__)

# one derivation with N=2048 takes a few milliseconds
SCRYPT_N = 2048
SCRYPT_R = 8
SCRYPT_P = 1


def derive_key(passphrase: str, length: int, salt: str, *, n: int = SCRYPT_N, r: int = SCRYPT_R,
               p: int = SCRYPT_P) -> bytes:
    """Derive exactly ``length`` bytes from a passphrase and salt using scrypt.

    Any string can be used as passphrase (including "") and salt. At least
    32 bytes are recommended for the passphrase and 8 bytes for the salt.

    Args:
        passphrase: The plaintext source of the key (UTF-8 encoded).
        length: Output length in bytes. ``length <= 0`` returns b"".
        salt: Salt string (UTF-8 encoded). Must match between encryption and
            decryption or the derived keys silently differ.
        n, r, p: scrypt work-factor parameters.

    Returns:
        Derived key bytes of length ``max(length, 0)``. The result is
        deterministic for identical inputs.

    Raises:
        TypeError on non-str passphrase or salt.
        InternalFault if the fallback derivation fails unexpectedly.
    """
    if not isinstance(passphrase, str):
        raise TypeError("passphrase must be a str")
    if not isinstance(salt, str):
        raise TypeError("salt must be a str")
    length = max(int(length), 0)
    if length == 0:
        return b""

    pwd = passphrase.encode("utf-8")
    started = time.perf_counter()
    try:
        key = hashlib.scrypt(pwd, salt=salt.encode("utf-8"), n=n, r=r, p=p, dklen=length)
    except ValueError as e:
        logger.warning("scrypt rejected parameters (n=%d, r=%d, p=%d, length=%d): %s; "
                       "falling back to naive passphrase stretching", n, r, p, length, e)
        return _naive_stretch(pwd, length)

    logger.debug("derived %d-byte key in %.1f ms", length, (time.perf_counter() - started) * 1000)
    return key


def _naive_stretch(pwd: bytes, length: int) -> bytes:
    # Last resort: truncate, or pad with i % 256 at each missing index i.
    try:
        if len(pwd) >= length:
            return pwd[:length]
        return pwd + bytes(i % 256 for i in range(len(pwd), length))
    except Exception as e:
        raise InternalFault(f"fallback key derivation failed: {e}") from e
