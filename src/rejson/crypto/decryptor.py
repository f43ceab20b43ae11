"""Decryption of EJSON messages back into plaintext strings."""

from __future__ import annotations

from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey

from rejson.crypto.keys import KeyPair
from rejson.crypto.message import Message
from rejson.exceptions import CorruptFieldError, DecryptionError, InvalidPlaintextError, MalformedMessageError


class Decryptor:
    """Decrypts serialized messages with the recipient's key pair.

    Unlike encryption, no shared key is computed up front: each message
    carries the sender's public key, so one Decryptor can open values
    sealed by any number of senders.
    """

    def __init__(self, keys: KeyPair) -> None:
        self.keys = keys

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt a value previously produced by an Encryptor.

        Args:
            ciphertext: The EJ[...] encoded message.

        Returns:
            The original plaintext.

        Raises:
            DecryptionError: If the message cannot be parsed or fails
                authentication.
            InvalidPlaintextError: If the decrypted bytes are not UTF-8.

        """
        try:
            message = Message.decode(ciphertext)
        except (MalformedMessageError, CorruptFieldError) as err:
            raise DecryptionError(f"Unable to parse encrypted value: {err}") from err

        try:
            box = Box(PrivateKey(self.keys.private.data), PublicKey(message.key.data))
            plaintext = box.decrypt(message.value, message.nonce.data)
        except CryptoError as err:
            raise DecryptionError("Unable to decrypt value: wrong key or corrupted ciphertext") from err

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as err:
            raise InvalidPlaintextError("Decrypted value is not valid UTF-8") from err
