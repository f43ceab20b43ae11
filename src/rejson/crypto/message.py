"""The EJSON wire format for a single encrypted value.

An encrypted value is stored in a secrets file as:

    EJ[<version>:<base64 key>:<base64 nonce>:<base64 encrypted value>]

where the key is the sender's (ephemeral) public key and every segment
uses standard base64 with padding.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from rejson.crypto.keys import KEY_SIZE, NONCE_SIZE, Key, Nonce
from rejson.exceptions import CorruptFieldError, MalformedMessageError

VERSION = 1

_B64 = "[A-Za-z0-9+/=]"
_PATTERN = re.compile(
    rf"EJ\[(?P<version>[0-9]):(?P<key>{_B64}{{44}}):(?P<nonce>{_B64}{{32}}):(?P<value>{_B64}+)\]"
)


def _b64decode(segment: str, field: str) -> bytes:
    try:
        return base64.b64decode(segment, validate=True)
    except binascii.Error as err:
        raise CorruptFieldError(f"Message {field} is not valid base64") from err


@dataclass(frozen=True, slots=True)
class Message:
    """An encrypted value as stored in a secrets file.

    Attributes:
        version: The format version, currently always 1.
        key: The sender's public key.
        nonce: The nonce the value was sealed with.
        value: The raw ciphertext, including the authentication tag.

    """

    version: int
    key: Key
    nonce: Nonce
    value: bytes

    @staticmethod
    def is_encrypted(text: str) -> bool:
        """Return whether the text has the structure of an encoded message.

        Only the shape is checked; nothing is decoded.
        """
        return isinstance(text, str) and _PATTERN.fullmatch(text) is not None

    def encode(self) -> str:
        """Serialize the message to its wire form."""
        return "EJ[{}:{}:{}:{}]".format(
            self.version,
            base64.b64encode(self.key.data).decode("ascii"),
            base64.b64encode(self.nonce.data).decode("ascii"),
            base64.b64encode(self.value).decode("ascii"),
        )

    def __str__(self) -> str:
        return self.encode()

    @classmethod
    def decode(cls, text: str) -> Message:
        """Parse a message from its wire form.

        Args:
            text: The encoded message.

        Returns:
            The parsed message.

        Raises:
            MalformedMessageError: If the text does not match the wire format.
            CorruptFieldError: If a segment is not valid base64 or decodes to
                the wrong length.

        """
        match = _PATTERN.fullmatch(text) if isinstance(text, str) else None
        if match is None:
            raise MalformedMessageError("Value is not an EJ[...] encrypted message")

        key = _b64decode(match["key"], "key")
        nonce = _b64decode(match["nonce"], "nonce")
        value = _b64decode(match["value"], "value")

        if len(key) != KEY_SIZE:
            raise CorruptFieldError(f"Message key must be {KEY_SIZE} bytes, got {len(key)}")
        if len(nonce) != NONCE_SIZE:
            raise CorruptFieldError(f"Message nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")

        return cls(version=int(match["version"]), key=Key(key), nonce=Nonce(nonce), value=value)
