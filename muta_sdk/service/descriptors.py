"""
Operation descriptors for service models.

A service model maps method names to descriptors. ``read()`` marks a method
as a read-only query, ``write()`` as a state-changing transaction. Both take
an optional transform that turns the caller's payload into the request the
chain expects.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from ..models import QueryServiceParam, Transaction

QueryServiceParamTransform = Callable[
    [Any],
    Union[QueryServiceParam, Mapping[str, Any], Awaitable[Union[QueryServiceParam, Mapping[str, Any]]]],
]
WritePayloadTransform = Callable[
    [Any],
    Union[Transaction, Mapping[str, Any], Awaitable[Union[Transaction, Mapping[str, Any]]]],
]

# attribute/key names accepted as the discriminant
_KIND_FIELDS = ("kind", "type")


class DescriptorKind(str, Enum):
    """Classification of a service model entry"""
    READ = "read"
    WRITE = "write"
    # anything else; bindings skip these unless strict
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Read:
    """Marks a service method as read-only: calls go through ``query_service_dyn``."""
    transform: Optional[QueryServiceParamTransform] = None
    kind: DescriptorKind = field(default=DescriptorKind.READ, init=False)


@dataclass(frozen=True)
class Write:
    """
    Marks a service method as a transaction.

    Called without a private key it composes the unsigned transaction;
    with one, it signs, submits and returns the decoded receipt.
    """
    transform: Optional[WritePayloadTransform] = None
    kind: DescriptorKind = field(default=DescriptorKind.WRITE, init=False)


def read(transform: Optional[QueryServiceParamTransform] = None) -> Read:
    return Read(transform=transform)


def write(transform: Optional[WritePayloadTransform] = None) -> Write:
    return Write(transform=transform)


def _lookup(handler: Any, name: str) -> Any:
    if isinstance(handler, Mapping):
        return handler[name]
    return getattr(handler, name)


def _has(handler: Any, name: str) -> bool:
    if isinstance(handler, Mapping):
        return name in handler
    return hasattr(handler, name)


def classify(handler: Any) -> DescriptorKind:
    """
    Classify a service model entry.

    Classification is structural: the entry must carry both a discriminant
    (``kind`` or ``type``) naming a known kind and a ``transform`` field,
    which may be None. Mappings are inspected by key, other objects by
    attribute. Everything else is ``UNKNOWN``.
    """
    tag_field = next((name for name in _KIND_FIELDS if _has(handler, name)), None)
    if tag_field is None or not _has(handler, "transform"):
        return DescriptorKind.UNKNOWN

    transform = _lookup(handler, "transform")
    if transform is not None and not callable(transform):
        return DescriptorKind.UNKNOWN

    try:
        return DescriptorKind(_lookup(handler, tag_field))
    except (ValueError, TypeError):
        return DescriptorKind.UNKNOWN


def is_read(handler: Any) -> bool:
    return classify(handler) is DescriptorKind.READ


def is_write(handler: Any) -> bool:
    return classify(handler) is DescriptorKind.WRITE


def get_transform(handler: Any) -> Optional[Callable[[Any], Any]]:
    """Transform of a classified descriptor (None selects default shaping)"""
    return _lookup(handler, "transform")
