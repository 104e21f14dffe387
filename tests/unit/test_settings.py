"""Unit tests for config.settings.TargetingConfig and geotargeting.utils.logging_utils."""

from __future__ import annotations

import logging

import pytest

from config.settings import TargetingConfig
from geotargeting.utils.logging_utils import (
    RequestContextAdapter,
    configure_logging,
    get_logger,
    get_request_logger,
)

_ENV_VARS = (
    "NOMINATIM_BASE_URL",
    "NOMINATIM_USER_AGENT",
    "GEOCODE_COUNTRY_CODES",
    "GEOCODE_LANGUAGE",
    "GEOCODE_CACHE_CAPACITY",
    "GEOCODE_CACHE_TTL_SECONDS",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def restore_logging():
    """Undo dictConfig changes to the package logger after each test."""
    root = logging.getLogger()
    pkg_logger = logging.getLogger("geotargeting")
    saved = (pkg_logger.level, pkg_logger.propagate, list(pkg_logger.handlers))
    saved_root = (root.level, list(root.handlers))
    yield pkg_logger
    pkg_logger.setLevel(saved[0])
    pkg_logger.propagate = saved[1]
    for handler in list(pkg_logger.handlers):
        if handler not in saved[2]:
            handler.close()
    pkg_logger.handlers = saved[2]
    root.setLevel(saved_root[0])
    root.handlers = saved_root[1]


class TestTargetingConfigDefaults:
    def test_defaults(self, clean_env):
        config = TargetingConfig()
        assert config.nominatim_base_url == "https://nominatim.openstreetmap.org"
        assert config.user_agent == "geotargeting/1.0"
        assert config.country_codes == "br"
        assert config.min_interval_seconds == 1.0
        assert config.autocomplete_min_chars == 3
        assert config.autocomplete_limit == 5
        assert config.cache_capacity is None
        assert config.cache_ttl_seconds is None
        assert config.target_roi_percent == 100
        assert config.avg_conversion_value == 50

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("NOMINATIM_BASE_URL", "http://localhost:8080")
        clean_env.setenv("NOMINATIM_USER_AGENT", "fleet-ads/2.0")
        clean_env.setenv("GEOCODE_CACHE_CAPACITY", "500")
        clean_env.setenv("GEOCODE_CACHE_TTL_SECONDS", "3600")
        clean_env.setenv("LOG_LEVEL", "DEBUG")
        config = TargetingConfig()
        assert config.nominatim_base_url == "http://localhost:8080"
        assert config.user_agent == "fleet-ads/2.0"
        assert config.cache_capacity == 500
        assert config.cache_ttl_seconds == 3600.0
        assert config.log_level == "DEBUG"

    def test_blank_cache_env_means_default(self, clean_env):
        clean_env.setenv("GEOCODE_CACHE_CAPACITY", "  ")
        assert TargetingConfig().cache_capacity is None

    def test_explicit_arguments_win(self, clean_env):
        clean_env.setenv("NOMINATIM_USER_AGENT", "from-env")
        assert TargetingConfig(user_agent="explicit").user_agent == "explicit"


class TestTargetingConfigValidation:
    @pytest.mark.parametrize("kwargs", [
        {"request_timeout": 0},
        {"max_retries": -1},
        {"min_interval_seconds": -0.5},
        {"cache_capacity": 0},
        {"cache_ttl_seconds": -10},
    ])
    def test_invalid_values_raise(self, clean_env, kwargs):
        with pytest.raises(ValueError):
            TargetingConfig(**kwargs)


class TestLoggingUtils:
    def test_get_logger_namespacing(self):
        assert get_logger("planner").name == "geotargeting.planner"
        assert get_logger("geotargeting.analysis").name == "geotargeting.analysis"

    def test_request_adapter_prefixes_messages(self):
        adapter = get_request_logger("planner", "campaign-42")
        assert isinstance(adapter, RequestContextAdapter)
        msg, _ = adapter.process("Estimating coverage", {})
        assert msg == "[campaign-42] Estimating coverage"

    def test_configure_logging_from_yaml(self, restore_logging):
        configure_logging(log_level="debug")
        assert restore_logging.level == logging.DEBUG
        assert restore_logging.propagate is False

    def test_configure_logging_with_file(self, restore_logging, tmp_path):
        log_file = tmp_path / "geotargeting.log"
        configure_logging(log_file=str(log_file))
        get_logger("tests").warning("written to file")
        for handler in restore_logging.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")
