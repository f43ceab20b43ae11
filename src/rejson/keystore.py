"""Private key storage.

Private keys live in a key directory, one file per key pair. Each file is
named after the hex encoded public key and contains the hex encoded private
key.
"""

import os
from pathlib import Path
from typing import TextIO

from icecream import ic

from rejson.crypto.keys import Key, KeyPair
from rejson.exceptions import InvalidKeyError, KeyNotFoundError, KeyStoreError

KEYDIR_ENV = "EJSON_KEYDIR"
DEFAULT_KEYDIR = "/opt/ejson/keys"

_KEY_FILE_MODE = 0o440


def key_path(directory: str | Path, public_key_hex: str) -> Path:
    """Return the path of the private key file for a public key."""
    return Path(directory) / public_key_hex


def read_private_key(directory: str | Path, public_key_hex: str) -> Key:
    """Read the private key for a public key from the key directory.

    Args:
        directory: The key directory.
        public_key_hex: The hex encoded public key naming the key file.

    Returns:
        The parsed private key.

    Raises:
        KeyNotFoundError: If no key file exists for the public key.
        InvalidKeyError: If the key file does not contain a hex encoded key.

    """
    path = key_path(directory, public_key_hex)
    ic(str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as err:
        raise KeyNotFoundError(f"No private key found for {public_key_hex} in '{directory}'") from err
    except OSError as err:
        raise KeyNotFoundError(f"Cannot read private key '{path}': {err.strerror}") from err

    try:
        return Key.from_hex(text.strip())
    except InvalidKeyError as err:
        raise InvalidKeyError(f"Private key file '{path}' is invalid: {err}") from err


def read_private_key_from(stream: TextIO) -> Key:
    """Read a hex encoded private key from a stream such as stdin."""
    return Key.from_hex(stream.read().strip())


def write_private_key(directory: str | Path, keys: KeyPair) -> Path:
    """Store the private key of a key pair in the key directory.

    Args:
        directory: The key directory. It must already exist.
        keys: The key pair to store.

    Returns:
        The path of the written key file.

    Raises:
        KeyNotFoundError: If the key directory does not exist.
        KeyStoreError: If the key file already exists or cannot be written.

    """
    if not Path(directory).is_dir():
        raise KeyNotFoundError(f"Key directory '{directory}' does not exist")

    path = key_path(directory, keys.public_key)
    ic(str(path))
    # The key file is created with its final mode.
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, _KEY_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as key_file:
            key_file.write(keys.private_key)
    except FileExistsError as err:
        raise KeyStoreError(f"Private key file '{path}' already exists") from err
    except OSError as err:
        raise KeyStoreError(f"Cannot write private key '{path}': {err.strerror}") from err
    return path
