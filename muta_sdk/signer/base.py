"""
Signer protocol.
"""
from typing import Protocol, Union, runtime_checkable

from ..models import SignedTransaction, Transaction

PrivateKey = Union[bytes, str]


@runtime_checkable
class Signer(Protocol):
    """Protocol for transaction signers"""

    def sign_transaction(self, transaction: Transaction, private_key: PrivateKey) -> SignedTransaction:
        """Sign transaction with the given key and return the signed envelope"""
        ...
