"""Secrets file parsing and in-place tree transformation.

A secrets file is a JSON object. String values are encrypted in place,
except for values whose key starts with an underscore; those (along with
numbers, booleans, nulls and arrays) are left exactly as written.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from icecream import ic

from rejson.crypto.keys import Key
from rejson.exceptions import InvalidKeyError, MissingPublicKeyError, SecretsFileError

PUBLIC_KEY_FIELD = "_public_key"
IGNORE_PREFIX = "_"

Transformer = Callable[[str], str]


def is_ignored(key: str) -> bool:
    """Return whether a key is marked to be left unencrypted."""
    return key.startswith(IGNORE_PREFIX)


def transform(tree: dict[str, Any], transformer: Transformer) -> None:
    """Apply a transformer to every eligible string value of a tree, in place.

    Nested objects are always recursed into, even when their key is
    ignore-marked; only string values under ignore-marked keys are skipped.
    An exception from the transformer stops the walk and propagates.

    Args:
        tree: The parsed JSON object to mutate.
        transformer: Called with each eligible string; its return value
            replaces the original.

    """
    for key, value in tree.items():
        if isinstance(value, dict):
            transform(value, transformer)
        elif isinstance(value, str) and not is_ignored(key):
            tree[key] = transformer(value)


class SecretsFile:
    """A parsed secrets file.

    Attributes:
        value: The top-level JSON object.

    """

    def __init__(self, value: dict[str, Any]) -> None:
        if not isinstance(value, dict):
            raise SecretsFileError("A secrets file must contain a JSON object")
        self.value = value

    @classmethod
    def loads(cls, text: str) -> SecretsFile:
        """Parse a secrets file from JSON text.

        Raises:
            SecretsFileError: If the text is not valid JSON or its top level
                value is not an object.

        """
        try:
            value = json.loads(text)
        except json.JSONDecodeError as err:
            raise SecretsFileError(f"Secrets file contains malformed JSON: {err}") from err
        return cls(value)

    @classmethod
    def load(cls, path: str | Path) -> SecretsFile:
        """Read and parse a secrets file.

        Args:
            path: Path to the secrets file.

        Returns:
            The parsed secrets file.

        Raises:
            SecretsFileError: If the file does not exist, cannot be read, or
                does not contain a JSON object.

        """
        ic(str(path))
        try:
            text = Path(path).read_text(encoding="utf-8")
        except FileNotFoundError as err:
            raise SecretsFileError(f"Secrets file '{path}' does not exist") from err
        except OSError as err:
            raise SecretsFileError(f"Cannot read secrets file '{path}': {err.strerror}") from err

        try:
            return cls.loads(text)
        except SecretsFileError as err:
            raise SecretsFileError(f"'{path}': {err}") from err

    def public_key(self) -> Key:
        """Return the key declared in the _public_key field.

        Raises:
            MissingPublicKeyError: If the field is absent, not a string, or
                not a valid hex encoded key.

        """
        declared = self.value.get(PUBLIC_KEY_FIELD)
        if not isinstance(declared, str):
            raise MissingPublicKeyError(f"Secrets file has no {PUBLIC_KEY_FIELD} field")
        try:
            return Key.from_hex(declared)
        except InvalidKeyError as err:
            raise MissingPublicKeyError(f"Secrets file has an invalid {PUBLIC_KEY_FIELD}: {err}") from err

    def transform(self, transformer: Transformer) -> None:
        """Transform every eligible value in the document, in place."""
        transform(self.value, transformer)

    def children(self, root_key: str) -> dict[str, str] | None:
        """Return the direct string children of a top-level object.

        Returns:
            A mapping of child key to string value, or None when the key is
            absent or does not hold an object.

        """
        root = self.value.get(root_key)
        if not isinstance(root, dict):
            return None
        return {key: value for key, value in root.items() if isinstance(value, str)}

    def without_public_key(self) -> SecretsFile:
        """Return a copy of this file without the _public_key field."""
        value = copy.deepcopy(self.value)
        value.pop(PUBLIC_KEY_FIELD, None)
        return SecretsFile(value)

    def dumps(self) -> str:
        """Return the pretty-printed JSON representation."""
        return json.dumps(self.value, indent=2, ensure_ascii=False)

    def __str__(self) -> str:
        return self.dumps()

    def save(self, path: str | Path) -> int:
        """Write the document to a file, returning the number of bytes written."""
        data = self.dumps().encode("utf-8")
        try:
            Path(path).write_bytes(data)
        except OSError as err:
            raise SecretsFileError(f"Cannot write to '{path}': {err.strerror}") from err
        return len(data)
