"""
Service bindings.

``create_service_binding`` turns a service model into a handle with one
coroutine per method. ``create_binding_class`` builds a class whose instances
act as one account against one service, signing every write with that
account's key.
"""
import logging
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple, Type

from ..exceptions import BindingError
from ..models import ExecResp, QueryServiceParam
from ..signer import LocalSigner, Signer
from ..utils import capitalize, maybe_await
from .descriptors import DescriptorKind, QueryServiceParamTransform, classify, get_transform
from .executor import WriteOperation


class ServiceBinding(Mapping[str, Callable[..., Any]]):
    """
    Handle exposing one callable per bound service method.

    Methods are reachable both by key (``binding["get_balance"]``) and as
    attributes (``binding.get_balance``).
    """

    def __init__(self, service_name: str, methods: Dict[str, Callable[..., Any]]):
        self.service_name = service_name
        self._methods = dict(methods)

    def __getitem__(self, method: str) -> Callable[..., Any]:
        return self._methods[method]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        methods = self.__dict__.get("_methods", {})
        if name in methods:
            return methods[name]
        raise AttributeError(f"Service '{self.__dict__.get('service_name')}' has no method '{name}'")

    def __repr__(self) -> str:
        return f"<ServiceBinding {self.service_name}: {', '.join(self._methods)}>"


def _iter_model(model: Any) -> Iterator[Tuple[str, Any]]:
    """Entries of a model given as a mapping or as a class namespace"""
    if isinstance(model, Mapping):
        yield from model.items()
        return
    for name, value in vars(model).items():
        if not name.startswith("_"):
            yield name, value


def _read_operation(
    service_name: str,
    method: str,
    transform: Optional[QueryServiceParamTransform],
    client: Any,
) -> Callable[..., Any]:
    async def query(payload: Any = None) -> ExecResp:
        if transform is not None:
            params = await maybe_await(transform(payload))
        else:
            params = QueryServiceParam(service_name=service_name, method=method, payload=payload)

        if not isinstance(params, QueryServiceParam):
            params = QueryServiceParam.model_validate(params)

        return await maybe_await(client.query_service_dyn(params))

    query.__name__ = method
    query.__qualname__ = f"{service_name}.{method}"
    return query


def create_service_binding(
    service_name: str,
    model: Any,
    client: Any,
    signer: Optional[Signer] = None,
    strict: bool = False,
    logger: Optional[logging.Logger] = None
) -> ServiceBinding:
    """
    Bind a service model to a client.

    Args:
        service_name: Name of the service on chain
        model: Mapping (or class namespace) of method name -> ``read()``/``write()``
        client: Transport client offering ``query_service_dyn``,
            ``compose_transaction``, ``send_transaction`` and ``get_receipt``
        signer: Signer used by write methods (defaults to :class:`LocalSigner`)
        strict: Raise instead of skipping entries that are not descriptors
        logger: Optional logger instance

    Returns:
        The binding handle

    Raises:
        BindingError: In strict mode, if an entry is neither a read nor a write
    """
    log = logger or logging.getLogger(__name__)
    signer = signer or LocalSigner(logger=log)

    methods: Dict[str, Callable[..., Any]] = {}
    for method, handler in _iter_model(model):
        kind = classify(handler)
        if kind is DescriptorKind.READ:
            methods[method] = _read_operation(service_name, method, get_transform(handler), client)
        elif kind is DescriptorKind.WRITE:
            methods[method] = WriteOperation(
                service_name,
                method,
                client=client,
                signer=signer,
                transform=get_transform(handler),
                logger=log,
            )
        elif strict:
            raise BindingError(f"{service_name}.{method} is neither a read nor a write descriptor: {handler!r}")
        else:
            log.debug(f"Skipping {service_name}.{method}: not a read or write descriptor")

    return ServiceBinding(service_name, methods)


# attributes the generated class sets itself
RESERVED_CLASS_ATTRIBUTES = frozenset({"service_name", "model", "client", "account", "_binding"})


def _account_read(method: str) -> Callable[..., Any]:
    async def call(self, payload: Any = None) -> ExecResp:
        return await self._binding[method](payload)

    call.__name__ = method
    return call


def _account_write(method: str) -> Callable[..., Any]:
    async def call(self, payload: Any = None):
        return await self._binding[method].sign_and_submit(payload, self.account.private_key)

    call.__name__ = method
    return call


def create_binding_class(
    service_name: str,
    model: Any,
    signer: Optional[Signer] = None,
    strict: bool = False
) -> Type[Any]:
    """
    Build a class binding a service model to a fixed account.

    Instances are created with ``(client, account)``. Read methods behave as
    in :func:`create_service_binding`; write methods take only the payload
    and always sign with the account's key, resolving to a receipt.

    Args:
        service_name: Name of the service on chain
        model: Mapping (or class namespace) of method name -> descriptor
        signer: Signer for writes; defaults to the account's own signer
        strict: Raise instead of skipping entries that are not descriptors

    Raises:
        BindingError: If a method name collides with an attribute of the
            generated class (see ``RESERVED_CLASS_ATTRIBUTES``), or in strict
            mode if an entry is neither a read nor a write
    """
    entries = dict(_iter_model(model))
    namespace: Dict[str, Any] = {
        "service_name": service_name,
        "model": entries,
        "__doc__": f"Binding of the '{service_name}' service to one account.",
    }

    for method, handler in entries.items():
        kind = classify(handler)
        if kind is not DescriptorKind.UNKNOWN and (method in RESERVED_CLASS_ATTRIBUTES or method.startswith("__")):
            raise BindingError(f"{service_name}.{method} collides with an attribute of the binding class")
        if kind is DescriptorKind.READ:
            namespace[method] = _account_read(method)
        elif kind is DescriptorKind.WRITE:
            namespace[method] = _account_write(method)
        elif strict:
            raise BindingError(f"{service_name}.{method} is neither a read nor a write descriptor: {handler!r}")

    def __init__(self, client: Any, account: Any, logger: Optional[logging.Logger] = None):
        self.client = client
        self.account = account
        self._binding = create_service_binding(
            service_name,
            entries,
            client,
            signer=signer or getattr(account, "signer", None),
            logger=logger,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} account={getattr(self.account, 'address', None)!r}>"

    namespace["__init__"] = __init__
    namespace["__repr__"] = __repr__
    return type(f"{capitalize(service_name)}Binding", (object,), namespace)
