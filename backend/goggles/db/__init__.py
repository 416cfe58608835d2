"""Database Layer — SQLAlchemy declarative Base shared by all models.

Design Decisions:
    - aiosqlite by default (single-process game), asyncpg accepted via DATABASE_URL
"""
