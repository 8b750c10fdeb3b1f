"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete for Alembic and tests
"""

from foopoc.models.foo import Foo  # noqa: F401
