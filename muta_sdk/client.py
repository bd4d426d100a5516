"""
MutaClient - GraphQL transport for a Muta node.
"""
import asyncio
import json
import logging
import urllib.parse
from typing import Any, Dict, Mapping, Optional, Union

import requests

from ._rate_limited_log import rate_limited_log
from .config import ClientConfig
from .exceptions import GraphQLError, ReceiptTimeoutError, TransportError
from .graphql import (
    ENCRYPTION_FIELDS,
    GET_LATEST_HEIGHT,
    GET_RECEIPT,
    QUERY_SERVICE,
    RAW_TRANSACTION_FIELDS,
    SEND_TRANSACTION,
)
from .models import ExecResp, QueryServiceParam, Receipt, Transaction
from .utils import hex_to_int, random_nonce, safe_parse_json

ZERO_ADDRESS = "0x" + "00" * 20


class MutaClient:
    """
    Client for a Muta node's GraphQL API.

    This client handles:
    1. Read-only service queries
    2. Composing unsigned transactions
    3. Submitting signed transactions and waiting for their receipts

    All public operations are coroutines. The HTTP round trip itself is made
    with ``requests`` on a worker thread so the event loop is never blocked.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the MutaClient

        Args:
            endpoint: GraphQL endpoint URL, overrides ``config.endpoint``
            config: Connection and transaction defaults
            session: Pre-configured requests session (optional)
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If the endpoint is not an http(s) URL
        """
        config = config or ClientConfig()
        if endpoint:
            config = config.model_copy(update={"endpoint": endpoint})

        parsed = urllib.parse.urlparse(config.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"endpoint must be an http:// or https:// URL (got: {config.endpoint})")

        self.config = config
        self.endpoint = config.endpoint
        self.timeout = config.http_timeout
        self.logger = logger or logging.getLogger(__name__)
        self.session = session or requests.Session()

    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(self.endpoint, json=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            self.logger.error(f"GraphQL request to {self.endpoint} failed: {e}")
            raise TransportError(f"GraphQL request failed: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON response from node: {e}")
            raise TransportError(f"Invalid JSON response from node: {e}") from e

        if not isinstance(result, dict):
            raise TransportError(f"Unexpected GraphQL response: {result!r}")

        errors = result.get("errors")
        if errors:
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise GraphQLError(f"GraphQL error: {messages}", errors=errors)

        return result.get("data") or {}

    async def execute(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Run a GraphQL query or mutation.

        Returns:
            The ``data`` object of the response

        Raises:
            TransportError: If the request fails or the response is not JSON
            GraphQLError: If the response carries GraphQL errors
        """
        body = {"query": document, "variables": variables or {}}
        return await asyncio.to_thread(self._post, body)

    async def get_latest_height(self) -> int:
        data = await self.execute(GET_LATEST_HEIGHT)
        try:
            return hex_to_int(data["getBlock"]["header"]["height"])
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError(f"Malformed getBlock response: {data!r}") from e

    async def compose_transaction(
        self,
        service_name: str,
        method: str,
        payload: Any = None,
        cycles_limit: Optional[Union[str, int]] = None,
        cycles_price: Optional[Union[str, int]] = None,
    ) -> Transaction:
        """
        Compose an unsigned transaction.

        The transaction expires ``timeout_gap`` blocks after the current
        height and gets a fresh random nonce.

        Args:
            service_name: Target service
            method: Target method
            payload: JSON-serializable payload, or an already encoded string
            cycles_limit: Overrides the configured cycles limit
            cycles_price: Overrides the configured cycles price

        Returns:
            The unsigned transaction
        """
        height = await self.get_latest_height()
        return Transaction(
            chain_id=self.config.chain_id,
            cycles_limit=cycles_limit if cycles_limit is not None else self.config.cycles_limit,
            cycles_price=cycles_price if cycles_price is not None else self.config.cycles_price,
            nonce=random_nonce(),
            timeout=height + self.config.timeout_gap,
            service_name=service_name,
            method=method,
            payload=payload,
        )

    async def query_service(self, params: Union[QueryServiceParam, Mapping[str, Any]]) -> ExecResp:
        """Run a read-only service call and return the raw response"""
        if not isinstance(params, QueryServiceParam):
            params = QueryServiceParam.model_validate(params)

        payload = params.payload
        if payload is None:
            payload = ""
        elif not isinstance(payload, str):
            payload = json.dumps(payload)

        variables = {
            "serviceName": params.service_name,
            "method": params.method,
            "payload": payload,
            "caller": params.caller or ZERO_ADDRESS,
        }
        for name, value in (
            ("height", params.height),
            ("cyclesLimit", params.cycles_limit),
            ("cyclesPrice", params.cycles_price),
        ):
            if value is not None:
                variables[name] = value

        self.logger.debug(f"Querying {params.service_name}.{params.method}")
        data = await self.execute(QUERY_SERVICE, variables)
        if not data.get("queryService"):
            raise TransportError(f"Malformed queryService response: {data!r}")
        return ExecResp.model_validate(data["queryService"])

    async def query_service_dyn(self, params: Union[QueryServiceParam, Mapping[str, Any]]) -> ExecResp:
        """Run a read-only service call, decoding ``ret`` from JSON when possible"""
        response = await self.query_service(params)
        response.ret = safe_parse_json(response.ret)
        return response

    async def send_transaction(self, record: Mapping[str, Any]) -> str:
        """
        Submit a signed transaction.

        Args:
            record: Flat mapping holding the raw transaction fields and the
                signature envelope fields, keyed by their camelCase names

        Returns:
            The transaction hash reported by the node

        Raises:
            ValueError: If the record lacks required fields
            TransportError: If the node rejects or fails the request
        """
        missing = [name for name in RAW_TRANSACTION_FIELDS + ENCRYPTION_FIELDS if name not in record]
        if missing:
            raise ValueError(f"Signed transaction missing fields: {', '.join(missing)}")

        variables = {
            "inputRaw": {name: record[name] for name in RAW_TRANSACTION_FIELDS},
            "inputEncryption": {name: record[name] for name in ENCRYPTION_FIELDS},
        }
        data = await self.execute(SEND_TRANSACTION, variables)
        tx_hash = data.get("sendTransaction")
        if not tx_hash:
            raise TransportError(f"Node did not return a transaction hash: {data!r}")

        self.logger.info(f"Transaction sent: {tx_hash}")
        return tx_hash

    async def get_receipt(
        self,
        tx_hash: str,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None
    ) -> Receipt:
        """
        Wait for and return the receipt of a transaction.

        The node reports a missing receipt until the transaction is committed;
        that state is polled every ``poll_interval`` seconds. Request failures
        are not retried.

        Args:
            tx_hash: Hex transaction hash
            timeout: Seconds to wait (defaults to ``config.receipt_timeout``)
            poll_interval: Seconds between polls (defaults to ``config.receipt_poll_interval``)

        Raises:
            ReceiptTimeoutError: If the receipt is not available in time
            TransportError: If a request fails
        """
        timeout = timeout if timeout is not None else self.config.receipt_timeout
        poll_interval = poll_interval if poll_interval is not None else self.config.receipt_poll_interval

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        last_error: Optional[GraphQLError] = None

        while True:
            try:
                data = await self.execute(GET_RECEIPT, {"txHash": tx_hash})
                raw_receipt = data.get("getReceipt")
            except GraphQLError as e:
                last_error = e
                raw_receipt = None
                rate_limited_log(
                    f"Receipt for {tx_hash} not available yet: {e}",
                    level="debug",
                    logger_instance=self.logger,
                )

            if raw_receipt:
                return Receipt.model_validate(raw_receipt)

            if loop.time() >= deadline:
                self.logger.warning(f"Gave up waiting for receipt of {tx_hash} after {timeout}s")
                raise ReceiptTimeoutError(tx_hash, timeout) from last_error

            await asyncio.sleep(poll_interval)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "MutaClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    async def __aenter__(self) -> "MutaClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
