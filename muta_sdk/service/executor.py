"""
Write-operation executor.

Each call of a bound write method runs one pipeline:

    compose -> (return unsigned) | sign -> submit -> fetch receipt -> decode

Whether the pipeline stops after composing depends only on whether a
private key was passed.
"""
import logging
from typing import Any, Mapping, Optional, Union

from ..exceptions import ServiceError
from ..models import Receipt, SignedTransaction, Transaction
from ..signer import PrivateKey, Signer
from ..utils import maybe_await, safe_parse_json, to_hex
from .descriptors import WritePayloadTransform


class WriteOperation:
    """
    A bound write method of a service.

    ``compose_only`` builds the unsigned transaction, e.g. for offline
    signing. ``sign_and_submit`` additionally signs it, sends it and resolves
    to the receipt with a decoded ``ret``. Calling the operation directly
    picks one of the two by the presence of ``private_key``.
    """

    def __init__(
        self,
        service_name: str,
        method: str,
        client: Any,
        signer: Signer,
        transform: Optional[WritePayloadTransform] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.service_name = service_name
        self.method = method
        self.client = client
        self.signer = signer
        self.transform = transform
        self.logger = logger or logging.getLogger(__name__)
        self.__name__ = method

    async def __call__(
        self, payload: Any = None, private_key: Optional[PrivateKey] = None
    ) -> Union[Transaction, Receipt]:
        if private_key is None:
            return await self.compose_only(payload)
        return await self.sign_and_submit(payload, private_key)

    async def compose_only(self, payload: Any = None) -> Transaction:
        """Compose the unsigned transaction; nothing is signed or sent."""
        if self.transform is not None:
            transaction = await maybe_await(self.transform(payload))
        else:
            transaction = await maybe_await(
                self.client.compose_transaction(
                    service_name=self.service_name,
                    method=self.method,
                    payload=payload,
                )
            )

        if not isinstance(transaction, Transaction):
            transaction = Transaction.model_validate(transaction)
        return transaction

    async def sign_and_submit(self, payload: Any, private_key: PrivateKey) -> Receipt:
        """
        Compose, sign and send a transaction, then return its receipt.

        Args:
            payload: Method payload
            private_key: Key handed to the signer

        Returns:
            The receipt, with ``response.ret`` decoded from JSON when possible

        Raises:
            ServiceError: If the service executed the call and reported an error
        """
        transaction = await self.compose_only(payload)

        signed = await maybe_await(self.signer.sign_transaction(transaction, private_key))
        if not isinstance(signed, SignedTransaction):
            signed = SignedTransaction.model_validate(signed)

        record = {
            **signed.input_encryption.model_dump(by_alias=True),
            **signed.input_raw.model_dump(by_alias=True),
        }
        self.logger.debug(f"Sending signed tx {signed.input_encryption.tx_hash} to {self.service_name}.{self.method}")

        try:
            tx_hash = await maybe_await(self.client.send_transaction(record))
        except Exception as e:
            self.logger.error(f"Failed to send transaction to {self.service_name}.{self.method}: {e}")
            raise
        tx_hash = to_hex(tx_hash)
        self.logger.debug(f"Tx sent: {tx_hash}")

        receipt = await maybe_await(self.client.get_receipt(tx_hash))
        return self._decode(receipt)

    def _decode(self, receipt: Union[Receipt, Mapping[str, Any]]) -> Receipt:
        if not isinstance(receipt, Receipt):
            receipt = Receipt.model_validate(receipt)

        if receipt.response.is_error:
            raise ServiceError(
                receipt.response.ret,
                service_name=self.service_name,
                method=self.method,
                receipt=receipt,
            )

        receipt.response.ret = safe_parse_json(receipt.response.ret)
        return receipt

    def __repr__(self) -> str:
        return f"<WriteOperation {self.service_name}.{self.method}>"
