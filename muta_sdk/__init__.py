"""
Muta SDK - bind chain services to Python coroutines, sign and send transactions.
"""
from .account import Account
from .client import MutaClient
from .config import ClientConfig
from .exceptions import (
    BindingError,
    GraphQLError,
    MutaError,
    ReceiptTimeoutError,
    ServiceError,
    TransportError,
)
from .models import (
    Event,
    ExecResp,
    InputEncryption,
    QueryServiceParam,
    Receipt,
    ReceiptResponse,
    SignedTransaction,
    Transaction,
)
from .service import (
    AssetService,
    MetadataService,
    ServiceBinding,
    WriteOperation,
    create_binding_class,
    create_service_binding,
    read,
    write,
)
from .signer import LocalSigner, Signer
from .version import __version__

__all__ = [
    "MutaClient",
    "ClientConfig",
    "Account",
    "Signer",
    "LocalSigner",
    "create_service_binding",
    "create_binding_class",
    "read",
    "write",
    "ServiceBinding",
    "WriteOperation",
    "AssetService",
    "MetadataService",
    "QueryServiceParam",
    "Transaction",
    "SignedTransaction",
    "InputEncryption",
    "ExecResp",
    "Event",
    "ReceiptResponse",
    "Receipt",
    "MutaError",
    "ServiceError",
    "TransportError",
    "GraphQLError",
    "ReceiptTimeoutError",
    "BindingError",
    "__version__",
]
