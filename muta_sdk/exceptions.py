"""
Exceptions for the Muta SDK.
"""
from typing import Any, Dict, List, Optional


class MutaError(Exception):
    """Base exception for all Muta SDK errors."""
    pass


class ServiceError(MutaError):
    """
    Raised when a transaction was executed but the service rejected it.

    The node returned a receipt whose response is flagged as an error; the raw
    ``ret`` string is kept verbatim so callers can inspect the service's own
    error message.
    """

    def __init__(
        self,
        ret: str,
        service_name: Optional[str] = None,
        method: Optional[str] = None,
        receipt: Any = None,
    ):
        self.ret = ret
        self.service_name = service_name
        self.method = method
        self.receipt = receipt
        super().__init__(f"RPC error: {ret}")


class TransportError(MutaError):
    """Raised when the node's GraphQL endpoint cannot be reached or answers garbage."""
    pass


class GraphQLError(TransportError):
    """Raised when the GraphQL response carries an ``errors`` array."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)


class ReceiptTimeoutError(TransportError):
    """Raised when a receipt does not show up before the configured deadline."""

    def __init__(self, tx_hash: str, timeout: float):
        self.tx_hash = tx_hash
        self.timeout = timeout
        super().__init__(f"Receipt for {tx_hash} not available after {timeout}s")


class BindingError(MutaError):
    """Raised by strict bindings when a service model entry is not a read or write."""
    pass
