"""rejson: encrypted secrets in JSON files.

This package stores secret values inside otherwise plaintext JSON
documents (EJSON files) so they can be kept in version control. Key
names and structure stay readable; string values are encrypted with a
Curve25519 box for the public key declared in the file.

Example usage:
    from rejson import SecretsFile, SecretsMap, encrypt, load_private_key

    # Encrypt every eligible value in place
    secrets = SecretsFile.load("secrets.ejson")
    secrets.transform(encrypt(secrets))
    secrets.save("secrets.ejson")

    # Or read decrypted values by dotted path
    key = load_private_key(secrets, "/opt/ejson/keys")
    secrets_map = SecretsMap.load_and_decrypt("secrets.ejson", key)
    secrets_map.fetch("database.password")
"""

__version__ = "0.3.0"

from rejson.crypto import Decryptor, Encryptor, Key, KeyPair, Message, Nonce
from rejson.document import SecretsFile, transform
from rejson.exceptions import (
    CorruptFieldError,
    DecryptionError,
    InvalidEnvironmentKeyError,
    InvalidKeyError,
    InvalidPlaintextError,
    KeyAgreementError,
    KeyNotFoundError,
    KeyStoreError,
    MalformedMessageError,
    MissingPublicKeyError,
    RejsonError,
    SecretsFileError,
)
from rejson.flatten import SecretsMap, flatten
from rejson.kube import SecretsManifest
from rejson.transforms import compact, decrypt, encrypt, load_private_key

__all__ = [
    # Version
    "__version__",
    # Crypto
    "Decryptor",
    "Encryptor",
    "Key",
    "KeyPair",
    "Message",
    "Nonce",
    # Documents
    "SecretsFile",
    "SecretsManifest",
    "SecretsMap",
    "flatten",
    "transform",
    # Transformers
    "compact",
    "decrypt",
    "encrypt",
    "load_private_key",
    # Exceptions
    "RejsonError",
    "CorruptFieldError",
    "DecryptionError",
    "InvalidEnvironmentKeyError",
    "InvalidKeyError",
    "InvalidPlaintextError",
    "KeyAgreementError",
    "KeyNotFoundError",
    "KeyStoreError",
    "MalformedMessageError",
    "MissingPublicKeyError",
    "SecretsFileError",
]
