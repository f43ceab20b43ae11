"""Transformers to apply to secrets files.

Each function here returns a ``str -> str`` callable for use with
:meth:`rejson.document.SecretsFile.transform`.
"""

from pathlib import Path

from icecream import ic

from rejson import keystore
from rejson.crypto.keys import Key, KeyPair
from rejson.crypto.message import Message
from rejson.document import SecretsFile, Transformer

NEW_LINE = "\n"
CARRIAGE_RETURN = "\r"


def compact() -> Transformer:
    """Return a transformer that folds multi-line strings onto one line.

    Strings containing line breaks are stripped of surrounding whitespace and
    have each line feed and carriage return replaced by its two character
    escape, so that something like a pasted service account survives as a
    single JSON string line before encryption.
    """

    def _compact(value: str) -> str:
        if NEW_LINE in value or CARRIAGE_RETURN in value:
            return value.strip().replace(NEW_LINE, r"\n").replace(CARRIAGE_RETURN, r"\r")
        return value

    return _compact


def encrypt(secrets_file: SecretsFile) -> Transformer:
    """Return a transformer that encrypts values for the file's public key.

    A single ephemeral key pair is generated per call and shared by every
    value encrypted with the returned transformer. Values that are already
    encrypted are returned unchanged.

    Raises:
        MissingPublicKeyError: If the file does not declare a valid public key.

    """
    public_key = secrets_file.public_key()
    ic(public_key.hex())
    encryptor = KeyPair.generate().encryptor(public_key)

    def _encrypt(value: str) -> str:
        if Message.is_encrypted(value):
            return value
        return encryptor.encrypt(value)

    return _encrypt


def decrypt(secrets_file: SecretsFile, private_key: Key) -> Transformer:
    """Return a transformer that decrypts values with the given private key.

    The key pair is formed from the file's declared public key and the
    supplied private key. Values that are not encrypted are returned
    unchanged.

    Raises:
        MissingPublicKeyError: If the file does not declare a valid public key.

    """
    public_key = secrets_file.public_key()
    ic(public_key.hex())
    decryptor = KeyPair(public=public_key, private=private_key).decryptor()

    def _decrypt(value: str) -> str:
        if not Message.is_encrypted(value):
            return value
        return decryptor.decrypt(value)

    return _decrypt


def load_private_key(secrets_file: SecretsFile, keydir: str | Path) -> Key:
    """Load the private key matching the file's public key from a key directory.

    Raises:
        MissingPublicKeyError: If the file does not declare a valid public key.
        KeyNotFoundError: If the key directory has no matching key file.
        InvalidKeyError: If the key file contents are not a valid key.

    """
    return keystore.read_private_key(keydir, secrets_file.public_key().hex())
