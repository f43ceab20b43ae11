"""Encryption of plaintext strings into EJSON messages."""

from __future__ import annotations

from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey
from nacl.secret import SecretBox

from rejson.crypto.keys import Key, KeyPair, Nonce
from rejson.crypto.message import VERSION, Message
from rejson.exceptions import KeyAgreementError


class Encryptor:
    """Encrypts strings into serialized messages for a single recipient.

    The shared key is computed once, so a single Encryptor can seal any
    number of values for the same recipient.

    Attributes:
        keys: The sender's key pair. Its public key is embedded in every
            message so the recipient can derive the same shared key.

    """

    def __init__(self, keys: KeyPair, shared_key: Key) -> None:
        self.keys = keys
        self._box = SecretBox(shared_key.data)

    @classmethod
    def from_peer(cls, keys: KeyPair, peer_public: Key) -> Encryptor:
        """Create an Encryptor from a key pair and the recipient's public key.

        Args:
            keys: The sender's key pair.
            peer_public: The recipient's public key.

        Returns:
            An Encryptor bound to the Diffie-Hellman shared key.

        Raises:
            KeyAgreementError: If the curve operation rejects the peer key.

        """
        try:
            shared = Box(PrivateKey(keys.private.data), PublicKey(peer_public.data)).shared_key()
        except CryptoError as err:
            raise KeyAgreementError(f"Unable to derive a shared key: {err}") from err
        return cls(keys, Key(shared))

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a string, returning the value to store in a secrets file."""
        nonce = Nonce.random()
        sealed = self._box.encrypt(plaintext.encode("utf-8"), nonce.data)
        return Message(version=VERSION, key=self.keys.public, nonce=nonce, value=sealed.ciphertext).encode()
