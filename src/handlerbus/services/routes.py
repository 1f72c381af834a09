"""RouteService: run discovery against handler modules and report the result.

Backs the ``routes`` and ``check`` commands. Discovery failures become
ServiceResult errors rather than exceptions.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from handlerbus.domain.errors import DiscoveryError, ModuleLoadError
from handlerbus.domain.handlers import type_name
from handlerbus.plugins.discovery import register_module
from handlerbus.services.dispatcher import Dispatcher
from handlerbus.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from handlerbus.config.settings import HandlerbusSettings

logger = logging.getLogger(__name__)


@contextmanager
def search_path(paths: Sequence[Path]) -> Iterator[None]:
    """Temporarily prepend *paths* to ``sys.path`` so modules there import."""
    added = [str(p) for p in paths if str(p) not in sys.path]
    sys.path[:0] = added
    try:
        yield
    finally:
        for entry in added:
            if entry in sys.path:
                sys.path.remove(entry)


class RouteService:
    """Build a throwaway dispatcher from handler modules and describe it."""

    def __init__(self, settings: HandlerbusSettings) -> None:
        self._settings = settings

    def routes(self, modules: Sequence[str], *, paths: Sequence[Path] = ()) -> ServiceResult:
        """Routing table: every message type with its handlers in dispatch order."""
        op = "routes"
        result = self._discover(op, modules, paths)
        if isinstance(result, ServiceResult):
            return result
        registry = result.registry
        table = [
            {
                "message_type": type_name(message_type),
                "handlers": [type_name(type(h)) for h in registry.lookup(message_type)],
            }
            for message_type in registry.message_types()
        ]
        warnings = [] if table else ["No handlers discovered"]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "modules": list(self._modules(modules)),
                "count": len(registry),
                "routes": table,
            },
            warnings=warnings,
        )

    def check(self, modules: Sequence[str], *, paths: Sequence[Path] = ()) -> ServiceResult:
        """Verify every module loads and every marked handler constructs."""
        op = "check"
        result = self._discover(op, modules, paths)
        if isinstance(result, ServiceResult):
            return result
        registry = result.registry
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "modules": list(self._modules(modules)),
                "message_types": len(registry.message_types()),
                "handlers": len(registry),
                "healthy": True,
            },
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _modules(self, modules: Sequence[str]) -> Sequence[str]:
        return modules or self._settings.discovery.modules

    def _discover(
        self,
        op: str,
        modules: Sequence[str],
        paths: Sequence[Path],
    ) -> Dispatcher | ServiceResult:
        names = self._modules(modules)
        if not names:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NO_MODULES",
                    message="No handler modules given and none configured in [discovery] modules",
                ),
            )

        discovery = self._settings.discovery
        dispatcher = Dispatcher()
        with search_path(paths):
            for name in names:
                try:
                    register_module(
                        dispatcher,
                        name,
                        policy=discovery.policy,
                        call_manifest=discovery.call_manifest,
                    )
                except DiscoveryError as exc:
                    logger.debug("Discovery failed for %s", name, exc_info=True)
                    return ServiceResult(
                        ok=False,
                        op=op,
                        error=ServiceError(
                            code=_error_code(exc),
                            message=str(exc),
                            detail=_error_detail(exc),
                        ),
                    )
                except Exception as exc:
                    # Only the module's register_handlers() raises anything else.
                    logger.debug("register_handlers failed in %s", name, exc_info=True)
                    return ServiceResult(
                        ok=False,
                        op=op,
                        error=ServiceError(
                            code="MANIFEST_FAILED",
                            message=f"register_handlers() in {name!r} failed: "
                            f"{type(exc).__name__}: {exc}",
                            detail={"module": name, "error_type": type(exc).__name__},
                        ),
                    )
        return dispatcher


def _error_code(exc: DiscoveryError) -> str:
    if isinstance(exc, ModuleLoadError):
        return "MODULE_LOAD_FAILED"
    return "INSTANTIATION_FAILED"


def _error_detail(exc: DiscoveryError) -> dict[str, Any]:
    detail: dict[str, Any] = {"module": exc.module_name}
    if exc.handler_type is not None:
        detail["handler_type"] = type_name(exc.handler_type)
    return detail
