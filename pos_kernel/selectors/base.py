"""
Module: pos_kernel.selectors.base
Responsibility: Abstract base class for read-only query selectors.
Architecture position: Kernel > Selectors.  May import from db/, models/ and
    domain/.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only access: selectors MUST NOT call session.add(), session.delete(),
      session.commit(), or session.flush().
    - DTO return convention: selectors return frozen dataclasses, NOT ORM rows.
    - Session ownership: the caller owns the session and its transaction.
"""

from abc import ABC
from datetime import datetime, timezone
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from pos_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """Abstract base class for all selectors."""

    def __init__(self, session: Session):
        self.session = session

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        # SQLite hands back naive datetimes; everything is stored as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
