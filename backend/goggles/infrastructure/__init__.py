"""Infrastructure Layer — database access, persisted cache slots, logging.

Invariants:
    - Storage errors mapped to DatabaseError (core/errors.py)
"""
