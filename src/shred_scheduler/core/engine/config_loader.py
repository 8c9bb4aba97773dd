"""
YAML → typed settings loader.

Loads host-level settings from scheduler.yaml (bundled with the package) and
optionally merges user overrides from ~/.shred-scheduler/scheduler.yaml.

Usage:
    from shred_scheduler.core.engine.config_loader import load_settings
    settings = load_settings()
    settings.horizon_days

The pure core never calls this; hosts (the CLI) read settings once and pass
values explicitly.  If the user override file has parse errors, a warning is
emitted and the file is ignored.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_REST_DAYS, SCHEDULE_HORIZON_DAYS
from ..models import is_int_in_range

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"shred-scheduler: ignoring settings file {path} ({exc})", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SchedulerSettings:
    """Settings a host passes into the core."""

    horizon_days: int = SCHEDULE_HORIZON_DAYS
    default_rest_days: frozenset[int] = DEFAULT_REST_DAYS
    data_dir: Path = Path("~/.shred-scheduler").expanduser()


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled scheduler.yaml, or None if not found."""
    ref = importlib.resources.files("shred_scheduler").joinpath("scheduler.yaml")
    candidate = Path(str(ref))
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.shred-scheduler/scheduler.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".shred-scheduler" / "scheduler.yaml"
    return p if p.exists() else None


def load_raw_config() -> dict[str, Any]:
    """
    Load and merge settings from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/shred_scheduler/scheduler.yaml
    2. User override at ~/.shred-scheduler/scheduler.yaml

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, _load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        config = _deep_merge(config, _load_yaml_file(user))

    return config


def settings_from_dict(raw: dict[str, Any]) -> SchedulerSettings:
    """
    Build typed settings from a merged config dict.

    Invalid values fall back to the defaults in config.py with a warning.
    """
    defaults = SchedulerSettings()
    schedule = raw.get("schedule") or {}
    storage = raw.get("storage") or {}

    horizon = schedule.get("horizon_days", defaults.horizon_days)
    if not is_int_in_range(horizon, 1, 3650):
        warnings.warn(f"shred-scheduler: invalid horizon_days {horizon!r}; using default", stacklevel=2)
        horizon = defaults.horizon_days

    rest = schedule.get("default_rest_days", sorted(defaults.default_rest_days))
    if not isinstance(rest, list) or not all(is_int_in_range(d, 0, 6) for d in rest):
        warnings.warn(f"shred-scheduler: invalid default_rest_days {rest!r}; using default", stacklevel=2)
        rest = sorted(defaults.default_rest_days)

    data_dir = storage.get("data_dir")
    return SchedulerSettings(
        horizon_days=horizon,
        default_rest_days=frozenset(rest),
        data_dir=Path(data_dir).expanduser() if data_dir else defaults.data_dir,
    )


def load_settings() -> SchedulerSettings:
    """Load, merge and type-check host settings."""
    return settings_from_dict(load_raw_config())
