"""Exception taxonomy for handler discovery and dispatcher misuse.

Handler failures during dispatch never surface as exceptions; they are
reported through the ``dispatch_failed`` hook instead. Only discovery-time
problems raise.
"""

from __future__ import annotations


class HandlerbusError(Exception):
    """Base exception for all handlerbus errors."""


class DiscoveryError(HandlerbusError):
    """Raised when handler discovery cannot complete.

    Attributes:
        module_name: Dotted name of the module being scanned.
        handler_type: The handler class involved, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        module_name: str,
        handler_type: type | None = None,
    ) -> None:
        super().__init__(message)
        self.module_name = module_name
        self.handler_type = handler_type


class ModuleLoadError(DiscoveryError):
    """The named handler module could not be imported."""


class HandlerInstantiationError(DiscoveryError):
    """A marked handler class could not be constructed without arguments.

    Registrations made before the failing class are kept.
    """
