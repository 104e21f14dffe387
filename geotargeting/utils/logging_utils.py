"""Logging utilities for geotargeting.

Provides YAML-based logging configuration and a request-id context adapter.
All loggers are namespaced under 'geotargeting'.
"""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, MutableMapping, Optional

import yaml


def configure_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Configure logging from the YAML configuration file.

    Falls back to basicConfig if the YAML file is not found.

    Args:
        config_path: Path to logging.yaml (defaults to config/logging.yaml).
        log_level: Override log level (e.g., "DEBUG", "INFO", "WARNING").
        log_file: Append a FileHandler writing to this path.
    """
    if config_path is None:
        config_path = str(Path(__file__).parent.parent.parent / "config" / "logging.yaml")

    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)

        if log_file:
            handlers = cfg.setdefault("handlers", {})
            handlers["file"] = {
                "class": "logging.FileHandler",
                "formatter": next(iter(cfg.get("formatters", {})), None),
                "filename": log_file,
                "encoding": "utf-8",
            }
            if handlers["file"]["formatter"] is None:
                del handlers["file"]["formatter"]
            for logger_cfg in cfg.get("loggers", {}).values():
                logger_cfg.setdefault("handlers", []).append("file")

        if log_level:
            for logger_cfg in cfg.get("loggers", {}).values():
                logger_cfg["level"] = log_level.upper()
            if "root" in cfg:
                cfg["root"]["level"] = log_level.upper()

        logging.config.dictConfig(cfg)
    else:
        logging.basicConfig(
            level=getattr(logging, (log_level or "INFO").upper(), logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            filename=log_file,
        )


def get_logger(name: str) -> logging.Logger:
    """Get a namespaced logger under 'geotargeting'.

    Args:
        name: Module or component name (e.g., "analysis.coverage").

    Returns:
        Logger instance with full 'geotargeting.<name>' namespace.
    """
    if name.startswith("geotargeting"):
        return logging.getLogger(name)
    return logging.getLogger(f"geotargeting.{name}")


class RequestContextAdapter(logging.LoggerAdapter):
    """Logger adapter that prefixes every message with a request id.

    Usage:
        logger = get_request_logger("planner", request_id="campaign-42")
        logger.info("Estimating coverage")
        # Output: ... geotargeting.planner: [campaign-42] Estimating coverage
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        request_id = self.extra.get("request_id", "unknown")
        return f"[{request_id}] {msg}", kwargs


def get_request_logger(name: str, request_id: str) -> RequestContextAdapter:
    """Get a request-context-aware logger adapter."""
    return RequestContextAdapter(get_logger(name), {"request_id": request_id})
