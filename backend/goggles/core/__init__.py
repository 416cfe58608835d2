"""Core Layer — pure browser logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic: no clocks, no randomness, no IO

Design Decisions:
    - Functional core separated from imperative shell: the shell awaits the cache,
      then hands plain record lists to the resolver and search engine
"""
