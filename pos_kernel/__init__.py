"""
POS Kernel - checkout and order-commit engine.

A transactional point-of-sale core with:
- Atomic checkout (all lines or nothing)
- Store-evaluated stock decrements with an oversell guard
- Immutable orders with snapshotted product names and prices
"""

__version__ = "0.1.0"
