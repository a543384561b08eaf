"""ORM Models - SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all
"""

from transactions_api.models.transaction import Transaction  # noqa: F401
