"""Process-wide defaults for key derivation and ciphertext encoding.

The default salt is used by every derived key that is not given an explicit
``salt=``. Production code MUST override it, once, at startup and before any
key is derived, either through the ``SIMPLECIPHER_SALT`` environment variable
or with :func:`configure`::

    import simplecipher
    simplecipher.configure(salt="my-application-specific-salt")

Changing the salt after a key has been derived with the old value makes those
keys impossible to reproduce. Writes to these settings are not synchronised;
configure before sharing ciphers between threads.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .encoding import StringCodec, HEX_CODEC, get_codec

logger = logging.getLogger(__name__)

DEFAULT_SALT = "3c7bef42a1524af19442b1b0a5751d29"

ENV_SALT = "SIMPLECIPHER_SALT"
ENV_CODEC = "SIMPLECIPHER_CODEC"


@dataclass
class Settings:
    salt: str = DEFAULT_SALT
    codec: StringCodec = HEX_CODEC

    @classmethod
    def from_env(cls) -> "Settings":
        salt = os.getenv(ENV_SALT) or DEFAULT_SALT
        codec = HEX_CODEC
        codec_name = os.getenv(ENV_CODEC)
        if codec_name:
            try:
                codec = get_codec(codec_name)
            except ValueError as e:
                logger.warning("ignoring %s: %s; using hex", ENV_CODEC, e)
        return cls(salt=salt, codec=codec)


_settings = Settings.from_env()
_salt_consumed = False


def get_settings() -> Settings:
    return _settings


def configure(*, salt: str | None = None, codec: StringCodec | str | None = None) -> Settings:
    """Override the process-wide default salt and/or codec.

    :param salt: New default salt. Recommended to be at least 8 bytes long.
    :param codec: A StringCodec or the name of one (see encoding.CODECS).
    :return: The updated settings.
    """
    if salt is not None:
        if not isinstance(salt, str):
            raise TypeError("salt must be a str")
        if _salt_consumed and salt != _settings.salt:
            logger.warning("default salt changed after keys were derived with it; "
                           "those keys can no longer be reproduced")
        _settings.salt = salt
    if codec is not None:
        _settings.codec = get_codec(codec) if isinstance(codec, str) else codec
    return _settings


def default_salt() -> str:
    """Return the default salt. Same value on every call until reconfigured."""
    global _salt_consumed
    _salt_consumed = True
    return _settings.salt


def default_codec() -> StringCodec:
    return _settings.codec


class CodecMixin:
    """Resolves a cipher's codec: its own when set, else the configured default."""

    _codec: StringCodec | None = None

    @property
    def codec(self) -> StringCodec:
        return self._codec if self._codec is not None else default_codec()
