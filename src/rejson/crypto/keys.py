"""Key material for rejson.

Keys and nonces are fixed-size byte strings matching the NaCl box
constants: 32 byte Curve25519 keys and 24 byte XSalsa20 nonces.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from nacl.public import PrivateKey
from nacl.utils import random as random_bytes

from rejson.exceptions import InvalidKeyError

if TYPE_CHECKING:
    from rejson.crypto.decryptor import Decryptor
    from rejson.crypto.encryptor import Encryptor

KEY_SIZE = 32
NONCE_SIZE = 24

_HEX_KEY_PATTERN = re.compile(rf"[0-9a-fA-F]{{{2 * KEY_SIZE}}}")


@dataclass(frozen=True, slots=True)
class Key:
    """A 32 byte encryption key.

    The canonical text form is lowercase hex, which is also what ``str()``
    returns, so a key can be written straight into a secrets file or used
    as a file name in the key directory.
    """

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != KEY_SIZE:
            raise InvalidKeyError(f"Key must be {KEY_SIZE} bytes, got {len(self.data)}")

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        # Never echo key bytes into tracebacks or debug output.
        return "Key(...)"

    def __bytes__(self) -> bytes:
        return self.data

    def hex(self) -> str:
        """Return the canonical 64 character lowercase hex form."""
        return self.data.hex()

    @classmethod
    def random(cls) -> Key:
        """Generate a random key."""
        return cls(random_bytes(KEY_SIZE))

    @classmethod
    def from_hex(cls, text: str) -> Key:
        """Parse a key from its hex text form.

        Args:
            text: Exactly 64 hex characters.

        Returns:
            The decoded key.

        Raises:
            InvalidKeyError: If the text has the wrong length or contains
                non-hex characters.

        """
        if not isinstance(text, str) or _HEX_KEY_PATTERN.fullmatch(text) is None:
            raise InvalidKeyError(f"Key must be {2 * KEY_SIZE} hex characters")
        return cls(bytes.fromhex(text))

    @classmethod
    def from_file(cls, path: str | Path) -> Key:
        """Read a hex encoded key from a file, ignoring surrounding whitespace."""
        return cls.from_hex(Path(path).read_text(encoding="utf-8").strip())


@dataclass(frozen=True, slots=True)
class Nonce:
    """A 24 byte nonce, drawn fresh for every encryption."""

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != NONCE_SIZE:
            raise InvalidKeyError(f"Nonce must be {NONCE_SIZE} bytes, got {len(self.data)}")

    def __str__(self) -> str:
        return self.data.hex()

    def __bytes__(self) -> bytes:
        return self.data

    @classmethod
    def random(cls) -> Nonce:
        """Generate a random nonce."""
        return cls(random_bytes(NONCE_SIZE))


@dataclass(frozen=True, slots=True)
class KeyPair:
    """A Curve25519 key pair.

    Attributes:
        public: The public key, shared in secrets files.
        private: The private key, kept in the key directory.

    """

    public: Key
    private: Key

    @classmethod
    def generate(cls) -> KeyPair:
        """Generate a key pair from a random private key."""
        private = Key.random()
        public = Key(bytes(PrivateKey(private.data).public_key))
        return cls(public=public, private=private)

    @property
    def public_key(self) -> str:
        """The hex encoded public key."""
        return self.public.hex()

    @property
    def private_key(self) -> str:
        """The hex encoded private key."""
        return self.private.hex()

    def encryptor(self, peer_public: Key) -> Encryptor:
        """Create an Encryptor from this key pair and a peer's public key."""
        from rejson.crypto.encryptor import Encryptor

        return Encryptor.from_peer(self, peer_public)

    def decryptor(self) -> Decryptor:
        """Create a Decryptor for values encrypted to this key pair."""
        from rejson.crypto.decryptor import Decryptor

        return Decryptor(self)
