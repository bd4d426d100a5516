"""
Models of the services every Muta chain ships with.
"""
from .binding import create_binding_class
from .descriptors import read, write

ASSET_SERVICE = {
    "get_asset": read(),
    "get_balance": read(),
    "get_allowance": read(),
    "create_asset": write(),
    "transfer": write(),
    "approve": write(),
    "transfer_from": write(),
}

METADATA_SERVICE = {
    "get_metadata": read(),
}

AssetService = create_binding_class("asset", ASSET_SERVICE)
MetadataService = create_binding_class("metadata", METADATA_SERVICE)
