"""Catalog error types"""


class CatalogError(Exception):
    """Base class for catalog failures"""


class CatalogLoadError(CatalogError):
    """The service catalog could not be resolved for a device"""


class ActionCallError(CatalogError):
    """A single remote action invocation failed"""

    def __init__(self, service: str, action: str, message: str = ""):
        self.service = service
        self.action = action
        super().__init__(message or f"unable to call action {action} on service {service}")
