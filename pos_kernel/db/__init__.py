"""Database layer - engine, session scope, base classes, and column types."""

from pos_kernel.db.base import Base, IdentityInteger, TimestampedBase
from pos_kernel.db.engine import (
    create_session_factory,
    create_tables,
    drop_tables,
    init_engine_from_url,
    session_scope,
)
from pos_kernel.db.types import Amount, Name, Quantity

__all__ = [
    "init_engine_from_url",
    "create_session_factory",
    "session_scope",
    "create_tables",
    "drop_tables",
    "Base",
    "TimestampedBase",
    "IdentityInteger",
    "Amount",
    "Quantity",
    "Name",
]
