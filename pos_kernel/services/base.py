"""
BaseService -- abstract base for kernel services that run inside a unit of work.

Responsibility:
    Provides the common constructor and session-handling contract for the
    checkout building blocks.  Concrete services receive a SQLAlchemy
    ``Session`` that they use via ``session.flush()`` -- never
    ``session.commit()``.

Invariants enforced:
    Transaction boundaries: services flush within the caller's transaction
    and never commit or roll back themselves.  CheckoutService owns the
    boundary through ``session_scope``.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from pos_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for unit-of-work services.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT open sessions; the active one is passed in explicitly.
    """

    def __init__(self, session: Session):
        self.session = session
