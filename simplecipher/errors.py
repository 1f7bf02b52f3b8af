class SimpleCipherError(Exception):
    """Base exception for simplecipher errors"""
    pass


class PlaintextSizeError(SimpleCipherError):
    """Raised when plaintext is not a multiple of the block size"""
    pass


class CiphertextTooShortError(SimpleCipherError):
    """Raised when ciphertext is shorter than one block"""
    pass


class CiphertextSizeError(SimpleCipherError):
    """Raised when ciphertext is not a multiple of the block size"""
    pass


class KeyConstructionError(SimpleCipherError):
    """Raised when the AES primitive rejects the key length"""
    pass


class IVSizeError(SimpleCipherError):
    """Raised when an IV or nonce has an invalid length"""
    pass


class CopyError(SimpleCipherError):
    """Raised when reading from or writing to a stream fails"""
    pass


class CodecError(SimpleCipherError):
    """Raised when an encoded ciphertext string is malformed"""
    pass


class AuthenticationError(SimpleCipherError):
    """Raised when AEAD tag verification fails during decryption"""
    pass


class InternalFault(SimpleCipherError):
    """Raised when an unexpected fault is caught at an operation boundary"""
    pass


class PaddingError(SimpleCipherError):
    """Base class for PKCS#7 unpadding errors"""
    pass


class PaddingNotFoundError(PaddingError):
    """Raised when there is no data to unpad"""
    pass


class PaddingNotAMultipleError(PaddingError):
    """Raised when padded data is not a multiple of the block size"""
    pass


class PaddingOutOfRangeError(PaddingError):
    """Raised when the padding byte is outside [1, block size]"""
    pass


class PaddingTooLongError(PaddingOutOfRangeError):
    pass


class PaddingTooShortError(PaddingOutOfRangeError):
    pass


class PaddingNotAllTheSameError(PaddingError):
    """Raised when the trailing padding bytes disagree with the count"""
    pass


class NonceReuseWarning(UserWarning):
    """Issued when a cipher will reuse the same nonce for every message"""
    pass
