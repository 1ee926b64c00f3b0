"""
Config -> Kernel Bridges.

Turn ``PosSettings`` into kernel objects.  These live in pos_config because
the kernel must NEVER import pos_config.

Usage:
    from pos_config import get_settings
    from pos_config.bridges import build_checkout_service

    settings = get_settings()
    engine = build_engine(settings)
    checkout = build_checkout_service(settings, create_session_factory(engine))
"""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from pos_config.schema import PosSettings
from pos_kernel.db.engine import init_engine_from_url
from pos_kernel.domain.clock import Clock
from pos_kernel.logging_config import configure_logging
from pos_kernel.services.checkout_service import CheckoutService


def build_engine(settings: PosSettings) -> Engine:
    """Configure logging at the requested level and build the engine."""
    configure_logging(level=logging.getLevelNamesMapping()[settings.log_level])
    db = settings.database
    return init_engine_from_url(
        db.url,
        echo=db.echo,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
        pool_recycle=db.pool_recycle,
    )


def build_checkout_service(
    settings: PosSettings,
    session_factory: sessionmaker[Session],
    clock: Clock | None = None,
) -> CheckoutService:
    """Wire a CheckoutService with the configured checkout policy."""
    return CheckoutService(
        session_factory,
        clock=clock,
        oversell_policy=settings.checkout.oversell_policy,
        lock_rows=settings.checkout.lock_rows,
    )
