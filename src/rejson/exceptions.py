"""Custom exceptions for rejson.

This module defines the exception hierarchy used throughout the application
to provide meaningful error messages and proper error handling.
"""


class RejsonError(Exception):
    """Base exception for all rejson errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all rejson errors with a single
    except clause if desired.
    """

    pass


class InvalidKeyError(RejsonError):
    """Raised when key material cannot be parsed.

    This can occur when:
    - The hex text is not exactly 64 characters long
    - The hex text contains non-hex characters
    - Raw key bytes are not exactly 32 bytes long
    """

    pass


class MalformedMessageError(RejsonError):
    """Raised when a string does not match the EJ[...] wire format."""

    pass


class CorruptFieldError(RejsonError):
    """Raised when a structurally valid message segment cannot be decoded.

    The segment either is not valid base64 or decodes to the wrong number
    of bytes for a key or nonce.
    """

    pass


class KeyAgreementError(RejsonError):
    """Raised when the curve operation rejects a peer public key."""

    pass


class DecryptionError(RejsonError):
    """Raised when an encrypted value cannot be decrypted.

    This can occur when:
    - The value is not a well-formed EJ[...] message
    - The private key does not match the key the value was encrypted for
    - The ciphertext has been tampered with or truncated
    """

    pass


class InvalidPlaintextError(DecryptionError):
    """Raised when a value decrypts successfully but is not valid UTF-8."""

    pass


class MissingPublicKeyError(RejsonError):
    """Raised when a secrets file has no usable _public_key field."""

    pass


class KeyNotFoundError(RejsonError):
    """Raised when the private key file is missing from the key directory."""

    pass


class KeyStoreError(RejsonError):
    """Raised when a private key cannot be written to the key directory.

    This can occur when:
    - The key directory is not writable
    - A key file for the same public key already exists
    """

    pass


class SecretsFileError(RejsonError):
    """Raised when reading or parsing a secrets file fails.

    This can occur when:
    - The file does not exist or cannot be read
    - The file is not valid JSON
    - The top-level JSON value is not an object
    """

    pass


class InvalidEnvironmentKeyError(RejsonError):
    """Raised when a key under "environment" is not a valid variable name."""

    pass
