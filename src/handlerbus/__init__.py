"""handlerbus: in-process, type-indexed message dispatch.

Public surface::

    from handlerbus import Dispatcher, Handler, auto_register

    @auto_register
    class AuditOrders(Handler[OrderCreated]):
        def handle(self, message: OrderCreated) -> None: ...

    dispatcher = Dispatcher.create_and_register("shop.handlers")
    dispatcher.dispatch(OrderCreated(order_id="o-1"))
"""

from handlerbus.domain.errors import (
    DiscoveryError,
    HandlerbusError,
    HandlerInstantiationError,
    ModuleLoadError,
)
from handlerbus.domain.events import DispatchEvent
from handlerbus.domain.handlers import (
    Handler,
    InstancePolicy,
    auto_register,
    handled_message_types,
    is_auto_registered,
)
from handlerbus.plugins.hookspecs import hookimpl
from handlerbus.services.dispatcher import Dispatcher
from handlerbus.services.registry import HandlerRegistry

__version__ = "0.3.0"

__all__ = [
    "DiscoveryError",
    "DispatchEvent",
    "Dispatcher",
    "Handler",
    "HandlerInstantiationError",
    "HandlerRegistry",
    "HandlerbusError",
    "InstancePolicy",
    "ModuleLoadError",
    "__version__",
    "auto_register",
    "handled_message_types",
    "hookimpl",
    "is_auto_registered",
]
