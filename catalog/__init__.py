"""Interfaces to the device's action/response service catalog"""
from .base import Action, Service, ServiceCatalog, CatalogLoader, Result, resolve_loader
from .errors import CatalogError, CatalogLoadError, ActionCallError

__all__ = [
    "Action",
    "Service",
    "ServiceCatalog",
    "CatalogLoader",
    "Result",
    "resolve_loader",
    "CatalogError",
    "CatalogLoadError",
    "ActionCallError",
]
