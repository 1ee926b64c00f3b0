"""
Configuration Loader (``pos_config.loader``).

Responsibility
--------------
Reads a YAML settings file and environment overrides and parses them into
``pos_config.schema`` dataclasses.

Environment overrides (take precedence over the file)
-----------------------------------------------------
* ``POS_DATABASE_URL``      -> database.url
* ``POS_OVERSELL_POLICY``   -> checkout.oversell_policy (reject | allow_backorder)
* ``POS_LOCK_ROWS``         -> checkout.lock_rows (true/false/1/0/yes/no)
* ``POS_LOG_LEVEL``         -> log_level

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or bad values  -> ``ValueError`` with the offending key.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from pos_config.schema import CheckoutSettings, DatabaseSettings, PosSettings
from pos_kernel.domain.dtos import OversellPolicy

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the top level is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{key}: expected a boolean, got {value!r}")


def parse_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key}: expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"{key}: expected an integer, got {value!r}") from None


def parse_oversell_policy(value: Any) -> OversellPolicy:
    if isinstance(value, OversellPolicy):
        return value
    try:
        return OversellPolicy(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in OversellPolicy)
        raise ValueError(
            f"checkout.oversell_policy: expected one of {allowed}, got {value!r}"
        ) from None


def _check_keys(section: str, data: Mapping[str, Any], allowed: set[str]) -> None:
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"{section}: unknown keys {sorted(unknown)}")


def parse_database(data: Mapping[str, Any]) -> DatabaseSettings:
    allowed = {f.name for f in fields(DatabaseSettings)}
    _check_keys("database", data, allowed)
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key == "url":
            kwargs[key] = str(value)
        elif key == "echo":
            kwargs[key] = parse_bool(value, "database.echo")
        else:
            kwargs[key] = parse_int(value, f"database.{key}")
    return DatabaseSettings(**kwargs)


def parse_checkout(data: Mapping[str, Any]) -> CheckoutSettings:
    _check_keys("checkout", data, {"oversell_policy", "lock_rows"})
    kwargs: dict[str, Any] = {}
    if "oversell_policy" in data:
        kwargs["oversell_policy"] = parse_oversell_policy(data["oversell_policy"])
    if "lock_rows" in data:
        kwargs["lock_rows"] = parse_bool(data["lock_rows"], "checkout.lock_rows")
    return CheckoutSettings(**kwargs)


def apply_env_overrides(data: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Return a copy of ``data`` with POS_* environment variables applied."""
    merged = {
        "database": dict(data.get("database") or {}),
        "checkout": dict(data.get("checkout") or {}),
        **{k: v for k, v in data.items() if k not in ("database", "checkout")},
    }
    if environ.get("POS_DATABASE_URL"):
        merged["database"]["url"] = environ["POS_DATABASE_URL"]
    if environ.get("POS_OVERSELL_POLICY"):
        merged["checkout"]["oversell_policy"] = environ["POS_OVERSELL_POLICY"]
    if environ.get("POS_LOCK_ROWS"):
        merged["checkout"]["lock_rows"] = environ["POS_LOCK_ROWS"]
    if environ.get("POS_LOG_LEVEL"):
        merged["log_level"] = environ["POS_LOG_LEVEL"]
    return merged


def parse_settings(data: Mapping[str, Any]) -> PosSettings:
    """Parse an already-merged settings mapping."""
    _check_keys("settings", data, {"database", "checkout", "log_level"})
    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in logging.getLevelNamesMapping():
        raise ValueError(f"log_level: unknown level {log_level!r}")
    return PosSettings(
        database=parse_database(data.get("database") or {}),
        checkout=parse_checkout(data.get("checkout") or {}),
        log_level=log_level,
    )
