"""
Module: pos_kernel.db.base
Responsibility: Declarative base classes for all SQLAlchemy ORM models.  Provides
    the integer primary key convention, the type annotation map for consistent
    column types, and the TimestampedBase mixin for creation timestamps.
Architecture position: Kernel > DB.  This is the lowest-level import target
    within the kernel.  ALL model files import from here.  This module MUST NOT
    import from models/, services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - Integer primary keys assigned by the store.  Product, order, and order
      line ids travel over the wire as plain integers.
    - Integer money: prices, subtotals, and totals are whole units of account
      stored as BIGINT.  NEVER use float for monetary amounts.
    - Timezone-aware timestamps for every DateTime column.
"""

from datetime import datetime
from typing import ClassVar

from sqlalchemy import BigInteger, DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only autoincrements INTEGER PRIMARY KEY, not BIGINT.
IdentityInteger = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Contract:
        Every ORM model in the system inherits from Base (or TimestampedBase).

    Guarantees:
        - id is a store-assigned integer.
        - int maps to BigInteger -- money and quantities never overflow 32 bits.
        - datetime maps to DateTime(timezone=True).
    """

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
        int: BigInteger,
    }

    id: Mapped[int] = mapped_column(
        IdentityInteger,
        primary_key=True,
        autoincrement=True,
    )


class TimestampedBase(Base):
    """
    Abstract base with a creation timestamp.

    Contract:
        created_at defaults to server NOW() but may be supplied explicitly
        (the checkout path passes the injected clock's time so the returned
        DTO and the stored row agree without a refresh).
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
