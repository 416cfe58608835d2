"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Slot store writes are whole-slot replacements (last write wins)
"""

from typing import Protocol


class CacheSlotStore(Protocol):
    """Contract for the persisted cache tier — implemented by shell."""
    async def read(self, key: str) -> str | None: ...
    async def write(self, values: dict[str, str]) -> None: ...
    async def delete(self, keys: list[str]) -> None: ...


class Clock(Protocol):
    """Millisecond wall clock — injected so expiry is testable."""
    def __call__(self) -> int: ...
