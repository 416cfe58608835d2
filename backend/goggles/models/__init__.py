"""ORM Models — SQLAlchemy declarative models.

All models imported here so Base.metadata is complete before create_all or
alembic autogenerate runs.
"""

from goggles.models.cache_slot import CacheSlot  # noqa: F401
