"""Observer registration and isolated lifecycle notification.

Observers are plain objects carrying ``@hookimpl`` methods for any subset
of the hooks in :class:`DispatchHookSpec`. They are registered explicitly
on a dispatcher, or loaded from the ``handlerbus.observers`` entry-point
group via pluggy's setuptools loader.

INVARIANT: Observer failures are warnings, never errors.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

import pluggy

from handlerbus.plugins.hookspecs import PROJECT_NAME, DispatchHookSpec

OBSERVER_ENTRY_POINT_GROUP = "handlerbus.observers"

logger = logging.getLogger(__name__)


class Notifier:
    """Holds the observers of one dispatcher and fans notifications out to them.

    Unlike a plain ``pm.hook.<name>(...)`` call, every implementation is
    invoked on its own so one failing observer cannot stop the others.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(DispatchHookSpec)

    def register(self, observer: object, name: str | None = None) -> None:
        """Register an observer instance. Registering the same instance twice is a no-op."""
        if observer is None:
            raise TypeError("observer must not be None")
        if self._pm.is_registered(observer):
            return
        self._pm.register(observer, name=name)
        logger.debug("Registered observer: %s", self._pm.get_name(observer))

    def unregister(self, observer: object) -> None:
        """Unregister an observer instance. No-op if it is not registered."""
        if self._pm.is_registered(observer):
            self._pm.unregister(observer)

    def get_observers(self) -> list[object]:
        """Return all registered observers."""
        return list(self._pm.get_plugins())

    def list_observer_names(self) -> list[str]:
        """Return names of all registered observers."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def load_entry_points(self, group: str = OBSERVER_ENTRY_POINT_GROUP) -> int:
        """Load observers advertised by installed distributions.

        Entry points may name an observer class or an instance; classes are
        instantiated. Returns the number of entry points pluggy loaded.
        """
        loaded = self._pm.load_setuptools_entrypoints(group)
        self._normalize_observer_instances()
        return loaded

    def notify(self, hook_name: str, **kwargs: Any) -> None:
        """Invoke every implementation of *hook_name*, isolating failures.

        Implementations run in pluggy's call order (last registered first,
        ``tryfirst``/``trylast`` honored). Hook wrappers are not supported and
        are skipped.
        """
        hook_caller = getattr(self._pm.hook, hook_name)
        for impl in reversed(hook_caller.get_hookimpls()):
            if impl.hookwrapper or getattr(impl, "wrapper", False):
                continue
            try:
                impl.function(*[kwargs[arg] for arg in impl.argnames])
            except Exception:
                logger.warning(
                    "Observer %s failed in %s",
                    impl.plugin_name,
                    hook_name,
                    exc_info=True,
                )

    def _normalize_observer_instances(self) -> None:
        """Replace registered observer classes with instantiated objects.

        Entry-point loading may register a class directly, which leaves
        ``self`` unbound when a hook fires.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point observer %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point observer: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("handlerbus")`` sets a ``handlerbus_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, f"{PROJECT_NAME}_impl", None):
                return True
        return False
