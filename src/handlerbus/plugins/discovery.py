"""Handler discovery: scan a module for marked handler classes and register them.

A class qualifies when it declares at least one ``Handler[M]`` capability
and is itself decorated with ``@auto_register``. Candidates are the
module's public exports: ``__all__`` when defined, otherwise the public
classes defined in the module.

A module may also expose a ``register_handlers(dispatcher)`` function.
Discovery calls it after scanning, for handlers that need constructor
arguments or are not marked.

Load and instantiation failures are fatal and propagate to the caller.
Registrations made before a failure are kept.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from importlib.metadata import entry_points
from types import ModuleType
from typing import TYPE_CHECKING, Any

from handlerbus.domain.errors import HandlerInstantiationError, ModuleLoadError
from handlerbus.domain.handlers import (
    InstancePolicy,
    handled_message_types,
    is_auto_registered,
    type_name,
)

if TYPE_CHECKING:
    from handlerbus.services.dispatcher import Dispatcher

HANDLER_ENTRY_POINT_GROUP = "handlerbus.handlers"
MANIFEST_FUNCTION = "register_handlers"

logger = logging.getLogger(__name__)


def load_module(module: ModuleType | str) -> ModuleType:
    """Resolve *module* to a module object, importing it by dotted name if needed."""
    if isinstance(module, ModuleType):
        return module
    try:
        return importlib.import_module(module)
    except Exception as exc:
        msg = f"Cannot load handler module {module!r}: {exc}"
        raise ModuleLoadError(msg, module_name=module) from exc


def exported_types(module: ModuleType) -> list[type]:
    """Public classes exported by *module*, ordered by name."""
    names = getattr(module, "__all__", None)
    if names is None:
        members = [
            obj
            for name, obj in inspect.getmembers(module, inspect.isclass)
            if not name.startswith("_") and obj.__module__ == module.__name__
        ]
    else:
        members = [getattr(module, name, None) for name in sorted(names)]

    found: list[type] = []
    for obj in members:
        if inspect.isclass(obj) and obj not in found:
            found.append(obj)
    return found


def register_module(
    dispatcher: Dispatcher,
    module: ModuleType | str,
    *,
    policy: InstancePolicy | str = InstancePolicy.PER_MESSAGE_TYPE,
    call_manifest: bool = True,
) -> list[tuple[type, Any]]:
    """Discover marked handlers in *module* and register them on *dispatcher*.

    With ``PER_MESSAGE_TYPE`` a class declaring several message types gets
    one fresh instance per type; with ``SHARED`` one instance is registered
    under every type.

    Returns the ``(message_type, handler)`` pairs registered by scanning.

    Raises:
        ModuleLoadError: *module* cannot be imported.
        HandlerInstantiationError: a marked class cannot be constructed.
    """
    policy = InstancePolicy(policy)
    mod = load_module(module)

    registered: list[tuple[type, Any]] = []
    for cls in exported_types(mod):
        if not is_auto_registered(cls):
            continue
        message_types = handled_message_types(cls)
        if not message_types:
            logger.debug("Skipping %s: marked but declares no Handler[M]", type_name(cls))
            continue

        shared: Any = None
        for message_type in message_types:
            if policy is InstancePolicy.SHARED and shared is not None:
                handler = shared
            else:
                handler = _instantiate(cls, mod.__name__)
                shared = handler
            dispatcher.register(message_type, handler)
            registered.append((message_type, handler))

    manifest = getattr(mod, MANIFEST_FUNCTION, None)
    if call_manifest and callable(manifest):
        manifest(dispatcher)
        logger.debug("Ran %s.%s", mod.__name__, MANIFEST_FUNCTION)

    logger.debug(
        "Discovered %d handler registration(s) in %s",
        len(registered),
        mod.__name__,
    )
    return registered


def register_entry_points(
    dispatcher: Dispatcher,
    group: str = HANDLER_ENTRY_POINT_GROUP,
    *,
    policy: InstancePolicy | str = InstancePolicy.PER_MESSAGE_TYPE,
    call_manifest: bool = True,
) -> list[tuple[type, Any]]:
    """Run :func:`register_module` for every module advertised in *group*.

    Each entry point must name a module (``shop = "shop.handlers"``).
    """
    registered: list[tuple[type, Any]] = []
    for ep in entry_points(group=group):
        try:
            target = ep.load()
        except Exception as exc:
            msg = f"Cannot load entry point {ep.name!r} ({ep.value}): {exc}"
            raise ModuleLoadError(msg, module_name=ep.value) from exc
        if not isinstance(target, ModuleType):
            msg = f"Entry point {ep.name!r} ({ep.value}) does not name a module"
            raise ModuleLoadError(msg, module_name=ep.value)
        registered.extend(
            register_module(dispatcher, target, policy=policy, call_manifest=call_manifest)
        )
    return registered


def _instantiate(cls: type, module_name: str) -> Any:
    try:
        return cls()
    except Exception as exc:
        msg = f"Cannot instantiate handler {type_name(cls)}: {exc}"
        raise HandlerInstantiationError(msg, module_name=module_name, handler_type=cls) from exc
