"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, handlerbus.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from handlerbus.domain.handlers import InstancePolicy
from handlerbus.plugins.discovery import HANDLER_ENTRY_POINT_GROUP
from handlerbus.plugins.notifier import OBSERVER_ENTRY_POINT_GROUP


class DiscoveryConfig(BaseModel):
    """[discovery] section."""

    model_config = {"frozen": True}

    modules: list[str] = Field(default_factory=list)
    policy: InstancePolicy = InstancePolicy.PER_MESSAGE_TYPE
    call_manifest: bool = True
    use_entry_points: bool = False
    entry_point_group: str = HANDLER_ENTRY_POINT_GROUP


class ObserversConfig(BaseModel):
    """[observers] section."""

    model_config = {"frozen": True}

    log_lifecycle: bool = False
    use_entry_points: bool = False
    entry_point_group: str = OBSERVER_ENTRY_POINT_GROUP
