"""
Transaction signers.
"""
from .base import PrivateKey, Signer
from .local import LocalSigner, encode_transaction, normalize_private_key

__all__ = ["Signer", "PrivateKey", "LocalSigner", "encode_transaction", "normalize_private_key"]
