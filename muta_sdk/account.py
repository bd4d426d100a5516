"""
Account identity for the Muta SDK.
"""
from typing import Optional

from eth_account import Account as EthAccount
from eth_utils import keccak

from .models import SignedTransaction, Transaction
from .signer import LocalSigner, PrivateKey, Signer, normalize_private_key
from .utils import to_hex


class Account:
    """
    A key pair and its chain address.

    The address is the first 20 bytes of the keccak256 digest of the
    compressed public key.
    """

    def __init__(self, private_key: PrivateKey, signer: Optional[Signer] = None):
        self._private_key = normalize_private_key(private_key)
        self._public_key = LocalSigner.public_key(self._private_key)
        self.signer = signer or LocalSigner()

    @classmethod
    def from_private_key(cls, private_key: PrivateKey) -> "Account":
        return cls(private_key)

    @classmethod
    def generate(cls) -> "Account":
        """Create an account with a fresh random key"""
        return cls(bytes(EthAccount.create().key))

    @property
    def private_key(self) -> bytes:
        return self._private_key

    @property
    def public_key(self) -> str:
        """Compressed public key as hex"""
        return to_hex(self._public_key)

    @property
    def address(self) -> str:
        return to_hex(keccak(self._public_key)[:20])

    def sign_transaction(self, transaction: Transaction) -> SignedTransaction:
        return self.signer.sign_transaction(transaction, self._private_key)

    def __repr__(self) -> str:
        return f"Account(address={self.address!r})"
