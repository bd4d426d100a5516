"""
Service models and bindings.
"""
from .binding import ServiceBinding, create_binding_class, create_service_binding
from .builtin import ASSET_SERVICE, METADATA_SERVICE, AssetService, MetadataService
from .descriptors import DescriptorKind, Read, Write, classify, is_read, is_write, read, write
from .executor import WriteOperation

__all__ = [
    "Read",
    "Write",
    "read",
    "write",
    "DescriptorKind",
    "classify",
    "is_read",
    "is_write",
    "ServiceBinding",
    "WriteOperation",
    "create_service_binding",
    "create_binding_class",
    "ASSET_SERVICE",
    "METADATA_SERVICE",
    "AssetService",
    "MetadataService",
]
