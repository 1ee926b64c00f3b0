"""
pos_config -- single public entrypoint for runtime configuration.

Responsibility:
    ``get_settings()`` is the only way the rest of the system obtains
    configuration.  It reads a YAML file (``POS_CONFIG_FILE`` or the bundled
    ``settings.yaml``), applies ``POS_*`` environment overrides, and returns
    a frozen ``PosSettings``.

Architecture position:
    Configuration sits above ``pos_kernel``.  The kernel MUST NEVER import
    from ``pos_config``; ``pos_config.bridges`` turns settings into kernel
    objects.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pos_config.loader import apply_env_overrides, load_yaml_file, parse_settings
from pos_config.schema import CheckoutSettings, DatabaseSettings, PosSettings

_logger = logging.getLogger("pos_kernel.config")

DEFAULT_SETTINGS_FILE = Path(__file__).parent / "settings.yaml"


def get_settings(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> PosSettings:
    """
    Load settings.

    Args:
        path: YAML file to read. Defaults to $POS_CONFIG_FILE, then the
            bundled settings.yaml.
        environ: Environment mapping for overrides. Defaults to os.environ.
    """
    environ = os.environ if environ is None else environ
    if path is None:
        path = environ.get("POS_CONFIG_FILE") or DEFAULT_SETTINGS_FILE
    path = Path(path)

    data = apply_env_overrides(load_yaml_file(path), environ)
    settings = parse_settings(data)

    _logger.info(
        "settings_loaded",
        extra={
            "source": str(path),
            "oversell_policy": settings.checkout.oversell_policy.value,
            "lock_rows": settings.checkout.lock_rows,
        },
    )
    return settings


__all__ = [
    "get_settings",
    "PosSettings",
    "DatabaseSettings",
    "CheckoutSettings",
    "DEFAULT_SETTINGS_FILE",
]
