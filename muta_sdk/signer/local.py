"""
Local secp256k1 signer.

Transactions are RLP-encoded in the node's field order, hashed with keccak256
and signed with a recoverable secp256k1 signature whose ``r || s`` part goes
on the wire together with the compressed public key.
"""
import logging
from typing import Optional

import rlp
from eth_keys import keys
from eth_utils import keccak

from ..models import InputEncryption, SignedTransaction, Transaction
from ..utils import hex_to_bytes, hex_to_int, to_hex
from .base import PrivateKey


def normalize_private_key(private_key: PrivateKey) -> bytes:
    """
    Accept a private key as raw bytes or hex and return its 32 raw bytes.

    Raises:
        ValueError: If the key is not valid hex or not 32 bytes long
        TypeError: For unsupported key types
    """
    if isinstance(private_key, str):
        try:
            key_bytes = hex_to_bytes(private_key)
        except ValueError as e:
            raise ValueError(f"Private key is not valid hex: {e}") from e
    elif isinstance(private_key, (bytes, bytearray)):
        key_bytes = bytes(private_key)
    else:
        raise TypeError(f"Private key must be bytes or hex string, got {type(private_key).__name__}")

    if len(key_bytes) != 32:
        raise ValueError(f"Private key must be 32 bytes, got {len(key_bytes)}")
    return key_bytes


def encode_transaction(transaction: Transaction) -> bytes:
    """RLP encoding of the fields covered by the signature"""
    return rlp.encode([
        hex_to_bytes(transaction.chain_id),
        hex_to_int(transaction.cycles_limit),
        hex_to_int(transaction.cycles_price),
        hex_to_bytes(transaction.nonce),
        transaction.method.encode("utf-8"),
        transaction.service_name.encode("utf-8"),
        transaction.payload.encode("utf-8"),
        hex_to_int(transaction.timeout),
    ])


class LocalSigner:
    """Signs transactions in-process with a secp256k1 key"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def sign_transaction(self, transaction: Transaction, private_key: PrivateKey) -> SignedTransaction:
        """
        Sign a transaction.

        Args:
            transaction: The unsigned transaction
            private_key: 32-byte secp256k1 key as bytes or hex string

        Returns:
            The transaction with its signature envelope

        Raises:
            ValueError: If the private key is malformed
        """
        key = keys.PrivateKey(normalize_private_key(private_key))
        tx_hash = keccak(encode_transaction(transaction))
        signature = key.sign_msg_hash(tx_hash)

        self.logger.debug(f"Signed transaction {to_hex(tx_hash)} for {transaction.service_name}.{transaction.method}")

        return SignedTransaction(
            input_raw=transaction,
            input_encryption=InputEncryption(
                tx_hash=to_hex(tx_hash),
                pubkey=to_hex(key.public_key.to_compressed_bytes()),
                # drop the recovery byte
                signature=to_hex(signature.to_bytes()[:64]),
            ),
        )

    @staticmethod
    def public_key(private_key: PrivateKey) -> bytes:
        """Compressed (33-byte) public key for a private key"""
        return keys.PrivateKey(normalize_private_key(private_key)).public_key.to_compressed_bytes()
