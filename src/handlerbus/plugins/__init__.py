"""Extension layer: handler discovery and lifecycle observers via pluggy.

Discovery: module scanning for ``@auto_register`` handlers, plus entry points.
INVARIANT: Observer failures are warnings, never errors.
"""

from handlerbus.plugins.discovery import register_entry_points, register_module
from handlerbus.plugins.notifier import Notifier

__all__ = ["Notifier", "register_entry_points", "register_module"]
