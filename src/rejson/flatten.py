"""Flattened, read-only views of secrets files.

Nested keys are joined with dots. A key that itself contains a dot is
wrapped in square brackets so it can be told apart from nesting:

    {"sub": {"key": "a", "file.ext": "b"}}  ->  {"sub.key": "a", "sub.[file.ext]": "b"}
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from rejson.crypto.keys import Key
from rejson.document import SecretsFile
from rejson.transforms import decrypt

SEPARATOR = "."


def safe_key(key: str) -> str:
    """Wrap a key in brackets if it contains the separator."""
    if SEPARATOR in key:
        return f"[{key}]"
    return key


def _scalar_text(value: Any) -> str | None:
    # bool is checked before int as it is a subclass
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return None


def _extract(flat: dict[str, str], path: str, value: Any) -> None:
    if isinstance(value, dict):
        for key, child in value.items():
            _extract(flat, f"{path}{SEPARATOR}{safe_key(key)}", child)
        return

    text = _scalar_text(value)
    if text is not None:
        flat[path] = text


def flatten(tree: Mapping[str, Any]) -> dict[str, str]:
    """Flatten a tree into dot-joined paths.

    Every string, number and boolean leaf is included regardless of its key.
    Nulls and arrays are skipped. When two leaves flatten to the same path,
    the one visited last wins.
    """
    flat: dict[str, str] = {}
    for key, value in tree.items():
        _extract(flat, safe_key(key), value)
    return flat


def split_path(path: str) -> list[str]:
    """Split a flattened path back into its keys, honouring bracket escapes.

    >>> split_path("sub.[file.ext]")
    ['sub', 'file.ext']
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in path:
        if char == "[" and not current and depth == 0:
            depth = 1
            continue
        if char == "]" and depth == 1:
            depth = 0
            continue
        if char == SEPARATOR and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts


class SecretsMap(Mapping[str, str]):
    """A flattened map of secrets.

    Values are not decrypted here unless that was done before the map was
    built (see :meth:`load_and_decrypt`). The map is a snapshot and does not
    track later changes to the source tree.
    """

    def __init__(self, tree: Mapping[str, Any]) -> None:
        self._inner = flatten(tree)

    @classmethod
    def load(cls, path: str | Path) -> SecretsMap:
        """Build a map from a secrets file without decrypting it."""
        return cls(SecretsFile.load(path).value)

    @classmethod
    def load_and_decrypt(cls, path: str | Path, private_key: Key) -> SecretsMap:
        """Build a map from a secrets file after decrypting it."""
        secrets_file = SecretsFile.load(path)
        secrets_file.transform(decrypt(secrets_file, private_key))
        return cls(secrets_file.value)

    def fetch(self, key: str) -> str:
        """Return the value at a path, raising KeyError if it is missing."""
        return self._inner[key]

    def fetch_or(self, key: str, default: str) -> str:
        """Return the value at a path, or the default if it is missing."""
        return self._inner.get(key, default)

    def __getitem__(self, key: str) -> str:
        return self._inner[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._inner)

    def __len__(self) -> int:
        return len(self._inner)

    def __repr__(self) -> str:
        return f"SecretsMap({sorted(self._inner)!r})"
