"""simplecipher package

Public API: AES string ciphers (CBC, CFB, OFB, CTR, GCM), raw stream ciphers,
key material helpers, string codecs, settings and error types.
Internal modules: simplecipher.primitives and simplecipher.utils are considered internal.

Set your own default salt at startup (see simplecipher.config) before deriving any key.
"""

from .block import (
    Cipher,
    CBC,
    SimpleCBC,
    StreamToBlock,
    new_cbc,
    simple_cbc,
    new_cfb,
    simple_cfb,
    new_ofb,
    simple_ofb,
    new_ctr,
    simple_ctr,
)
from .stream import (
    Stream,
    StreamCipher,
    new_cfb_stream,
    simple_cfb_stream,
    new_ofb_stream,
    simple_ofb_stream,
    new_ctr_stream,
    simple_ctr_stream,
)
from .aead import GCM, new_gcm, simple_gcm
from .keys import (
    Key,
    BytesKey,
    StringKey,
    KeyGen,
    RandomIV,
    new_key,
    new_aes_key,
    new_nonce,
    new_iv,
    new_random_iv,
    AES128,
    AES192,
    AES256,
    BLOCK_SIZE,
    NONCE_SIZE,
)
from .kdf import derive_key
from .encoding import (
    StringCodec,
    NOP_CODEC,
    HEX_CODEC,
    BASE64_STD_CODEC,
    BASE64_URL_CODEC,
    BASE32_STD_CODEC,
    BASE32_HEX_CODEC,
    get_codec,
)
from .config import DEFAULT_SALT, Settings, configure, get_settings, default_salt, default_codec
from .errors import (
    SimpleCipherError,
    PlaintextSizeError,
    CiphertextTooShortError,
    CiphertextSizeError,
    KeyConstructionError,
    IVSizeError,
    CopyError,
    CodecError,
    AuthenticationError,
    InternalFault,
    PaddingError,
    PaddingNotFoundError,
    PaddingNotAMultipleError,
    PaddingOutOfRangeError,
    PaddingTooLongError,
    PaddingTooShortError,
    PaddingNotAllTheSameError,
    NonceReuseWarning,
)

__version__ = "0.1.0"

__all__ = [
    # string ciphers
    "Cipher",
    "CBC",
    "SimpleCBC",
    "StreamToBlock",
    "GCM",
    "new_cbc",
    "simple_cbc",
    "new_cfb",
    "simple_cfb",
    "new_ofb",
    "simple_ofb",
    "new_ctr",
    "simple_ctr",
    "new_gcm",
    "simple_gcm",
    # stream ciphers
    "Stream",
    "StreamCipher",
    "new_cfb_stream",
    "simple_cfb_stream",
    "new_ofb_stream",
    "simple_ofb_stream",
    "new_ctr_stream",
    "simple_ctr_stream",
    # keys
    "Key",
    "BytesKey",
    "StringKey",
    "KeyGen",
    "RandomIV",
    "new_key",
    "new_aes_key",
    "new_nonce",
    "new_iv",
    "new_random_iv",
    "derive_key",
    "AES128",
    "AES192",
    "AES256",
    "BLOCK_SIZE",
    "NONCE_SIZE",
    # codecs
    "StringCodec",
    "NOP_CODEC",
    "HEX_CODEC",
    "BASE64_STD_CODEC",
    "BASE64_URL_CODEC",
    "BASE32_STD_CODEC",
    "BASE32_HEX_CODEC",
    "get_codec",
    # settings
    "DEFAULT_SALT",
    "Settings",
    "configure",
    "get_settings",
    "default_salt",
    "default_codec",
    # errors
    "SimpleCipherError",
    "PlaintextSizeError",
    "CiphertextTooShortError",
    "CiphertextSizeError",
    "KeyConstructionError",
    "IVSizeError",
    "CopyError",
    "CodecError",
    "AuthenticationError",
    "InternalFault",
    "PaddingError",
    "PaddingNotFoundError",
    "PaddingNotAMultipleError",
    "PaddingOutOfRangeError",
    "PaddingTooLongError",
    "PaddingTooShortError",
    "PaddingNotAllTheSameError",
    "NonceReuseWarning",
]
