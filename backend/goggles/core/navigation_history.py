"""Navigation History — per-tab back/forward stack over classified Locations.

Invariants:
    - entries is never empty (seeded with Home at tab creation)
    - 0 <= index < len(entries) at all times
    - navigate_to discards forward entries, exactly like real browsers
    - navigate_to(current location) is a no-op (idempotent clicks add nothing)
    - back()/forward() clamp at the ends, never raise

Design Decisions:
    - Immutable: every operation returns a new NavigationHistory, so the tab reducer
      can replace state wholesale and old snapshots stay valid
    - Entries carry an insertion order counter for observability (which visit is which)
"""

from dataclasses import dataclass, field

from goggles.core.address_codec import Home, Location


@dataclass(frozen=True)
class HistoryEntry:
    location: Location
    order: int


@dataclass(frozen=True)
class NavigationHistory:
    entries: tuple[HistoryEntry, ...] = field(
        default_factory=lambda: (HistoryEntry(Home(), 0),),
    )
    index: int = 0
    next_order: int = 1

    def __post_init__(self):
        if not self.entries:
            raise ValueError("NavigationHistory requires at least one entry")
        if not 0 <= self.index < len(self.entries):
            raise ValueError(
                f"index {self.index} out of range for {len(self.entries)} entries",
            )

    @classmethod
    def seeded(cls, location: Location | None = None) -> "NavigationHistory":
        return cls(entries=(HistoryEntry(location or Home(), 0),))

    @property
    def current(self) -> Location:
        return self.entries[self.index].location

    @property
    def length(self) -> int:
        return len(self.entries)

    @property
    def can_go_back(self) -> bool:
        return self.index > 0

    @property
    def can_go_forward(self) -> bool:
        return self.index < len(self.entries) - 1

    def navigate_to(self, location: Location) -> "NavigationHistory":
        if location == self.current:
            return self
        kept = self.entries[:self.index + 1]
        entries = (*kept, HistoryEntry(location, self.next_order))
        return NavigationHistory(
            entries=entries,
            index=len(entries) - 1,
            next_order=self.next_order + 1,
        )

    def back(self) -> "NavigationHistory":
        if not self.can_go_back:
            return self
        return NavigationHistory(self.entries, self.index - 1, self.next_order)

    def forward(self) -> "NavigationHistory":
        if not self.can_go_forward:
            return self
        return NavigationHistory(self.entries, self.index + 1, self.next_order)

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "length": self.length,
            "can_go_back": self.can_go_back,
            "can_go_forward": self.can_go_forward,
            "entries": [
                {"order": e.order, "kind": e.location.kind.value}
                for e in self.entries
            ],
        }
