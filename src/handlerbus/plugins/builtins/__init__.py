"""Built-in lifecycle observers."""

from handlerbus.plugins.builtins.logging_observer import LoggingObserver
from handlerbus.plugins.builtins.stats import DispatchStats

__all__ = ["DispatchStats", "LoggingObserver"]
