"""Services Layer — cache tiers, seed loading, hydration, and the browser session shell.

Invariants:
    - Services own all IO (persisted cache, seed files); core stays pure
    - Every navigation re-reads the cache lazily (no snapshot at startup)

Design Decisions:
    - One service per concern for locality (cache, seed, hydration, session)
"""
