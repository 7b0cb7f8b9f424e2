"""Protocols for the already-resolved service catalog of a device

The catalog is owned by an external loader which performs discovery and the
remote invocation. Collectors only walk ``services`` and ``actions`` and call
the actions they need.
"""
import importlib
from typing import Any, Callable, Mapping, Protocol

from .errors import CatalogLoadError


Result = Mapping[str, Any]


class Action(Protocol):
    """One invocable remote action"""

    def call(self) -> Result:
        ...

    def call_with_param(self, name: str, value: Any) -> Result:
        ...


class Service(Protocol):
    """A named group of remote actions"""

    actions: Mapping[str, Action]


class ServiceCatalog(Protocol):
    """Services of one device keyed by service identifier"""

    services: Mapping[str, Service]


CatalogLoader = Callable[[str, int, str, str], ServiceCatalog]


def resolve_loader(path: str) -> CatalogLoader:
    """Import a catalog loader from a ``module:callable`` path"""
    if not path or ":" not in path:
        raise CatalogLoadError(f"invalid catalog loader path: {path!r}")

    module_name, attr_name = path.split(":", 1)
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise CatalogLoadError(f"cannot import catalog loader module {module_name}: {e}") from e

    loader = getattr(module, attr_name, None)
    if not callable(loader):
        raise CatalogLoadError(f"catalog loader {attr_name} not found in {module_name}")
    return loader
