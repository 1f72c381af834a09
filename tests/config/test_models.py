"""Tests for config section models — defaults and sparse overrides."""

import pytest
from pydantic import ValidationError

from handlerbus import InstancePolicy
from handlerbus.config.models import DiscoveryConfig, ObserversConfig


class TestDiscoveryConfig:
    def test_defaults(self) -> None:
        cfg = DiscoveryConfig()
        assert cfg.modules == []
        assert cfg.policy is InstancePolicy.PER_MESSAGE_TYPE
        assert cfg.call_manifest is True
        assert cfg.use_entry_points is False
        assert cfg.entry_point_group == "handlerbus.handlers"

    def test_sparse_override(self) -> None:
        cfg = DiscoveryConfig.model_validate({"policy": "shared"})
        assert cfg.policy is InstancePolicy.SHARED
        assert cfg.call_manifest is True  # default preserved

    def test_unknown_policy(self) -> None:
        with pytest.raises(ValidationError):
            DiscoveryConfig.model_validate({"policy": "per-handler"})

    def test_frozen(self) -> None:
        cfg = DiscoveryConfig()
        with pytest.raises(ValidationError):
            cfg.call_manifest = False  # type: ignore[misc]


class TestObserversConfig:
    def test_defaults(self) -> None:
        cfg = ObserversConfig()
        assert cfg.log_lifecycle is False
        assert cfg.use_entry_points is False
        assert cfg.entry_point_group == "handlerbus.observers"

    def test_json_round_trip(self) -> None:
        cfg = ObserversConfig(log_lifecycle=True, entry_point_group="acme.observers")
        assert ObserversConfig.model_validate_json(cfg.model_dump_json()) == cfg
