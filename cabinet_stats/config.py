"""
Dashboard settings.

Defaults live here; a ``settings.json`` next to the app (or the file named by
``CABINET_STATS_SETTINGS``) overrides individual keys. A missing file is
normal, an unreadable one is logged and ignored.
"""
from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

from cabinet_stats.log import get_logger
from cabinet_stats.reconcile import BASELINES

log = get_logger(__name__)

SETTINGS_ENV = "CABINET_STATS_SETTINGS"
LOG_LEVEL_ENV = "CABINET_STATS_LOG_LEVEL"
DEFAULT_SETTINGS_PATH = "settings.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "brand": "Cabinet Statistics",
    "currency": "₽",
    "cutoff_label": "00:00 MSK",
    "reconcile_baseline": "first",
    "export_format": "xlsx",
    "log_level": "INFO",
    "json_logs": False,
    "sample_days": 7,
    "sample_seed": 7,
}


def default_config() -> Dict[str, Any]:
    return dict(DEFAULT_CONFIG)


def load_settings_json(path: Optional[str] = None) -> Dict[str, Any]:
    path = path or os.getenv(SETTINGS_ENV, DEFAULT_SETTINGS_PATH)
    cfg = default_config()
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings file must hold a JSON object")
            for k, v in data.items():
                if k in cfg:
                    cfg[k] = v
                else:
                    log.warning("unknown setting ignored", extra={"setting": k, "path": path})
        except (OSError, ValueError) as e:
            log.warning("could not read settings, using defaults", extra={"path": path, "error": str(e)})
            cfg = default_config()
    level = os.getenv(LOG_LEVEL_ENV)
    if level:
        cfg["log_level"] = level
    if cfg["reconcile_baseline"] not in BASELINES:
        raise ValueError(f"reconcile_baseline must be one of {BASELINES}, got {cfg['reconcile_baseline']!r}")
    return cfg


__all__ = ["DEFAULT_CONFIG", "SETTINGS_ENV", "LOG_LEVEL_ENV", "default_config", "load_settings_json"]
