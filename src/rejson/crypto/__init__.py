"""Cryptography subpackage.

This package contains the key material types, the EJSON message wire
format, and the box based encryptor and decryptor.
"""

from rejson.crypto.decryptor import Decryptor
from rejson.crypto.encryptor import Encryptor
from rejson.crypto.keys import KEY_SIZE, NONCE_SIZE, Key, KeyPair, Nonce
from rejson.crypto.message import Message

__all__ = [
    "KEY_SIZE",
    "NONCE_SIZE",
    "Decryptor",
    "Encryptor",
    "Key",
    "KeyPair",
    "Message",
    "Nonce",
]
