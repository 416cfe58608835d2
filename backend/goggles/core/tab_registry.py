"""Tab Registry — owns the set of tabs, the active pointer, and the capacity limit.

Invariants:
    - At least one tab always exists; closing the only tab is a no-op
    - active_id always names an existing tab
    - len(tabs) never exceeds capacity through add_tab (capacity >= 1)
    - Lowering capacity below the current count closes nothing, it only blocks add_tab
    - Tab ids and request ids are monotonic and never reused

Design Decisions:
    - Registry is the single mutable object in core: it holds immutable TabStates
      and swaps them wholesale on every dispatch
    - dispatch() on a closed tab returns None (late search completions are dropped)
"""

from goggles.core.address_codec import BrowserHosts, DEFAULT_HOSTS
from goggles.core.domain_types import DEFAULT_MAX_TABS, RequestId, TabId
from goggles.core.errors import TabNotFoundError
from goggles.core.tab_state import TabAction, TabState, reduce_tab


class TabRegistry:
    def __init__(self, capacity: int = DEFAULT_MAX_TABS, hosts: BrowserHosts = DEFAULT_HOSTS):
        self.hosts = hosts
        self.capacity = max(1, int(capacity))
        self._next_tab_id = 1
        self._next_request_id = 1
        first = self._new_tab()
        self._tabs: list[TabState] = [first]
        self.active_id: TabId = first.id

    def _new_tab(self) -> TabState:
        tab_id = TabId(self._next_tab_id)
        self._next_tab_id += 1
        return TabState.new(tab_id, self.hosts)

    def _index_of(self, tab_id: int) -> int | None:
        for i, tab in enumerate(self._tabs):
            if tab.id == tab_id:
                return i
        return None

    # ─── Queries ─────────────────────────────────────────────────

    @property
    def tabs(self) -> tuple[TabState, ...]:
        return tuple(self._tabs)

    @property
    def active(self) -> TabState:
        return self.require(self.active_id)

    def get(self, tab_id: int) -> TabState | None:
        index = self._index_of(tab_id)
        return None if index is None else self._tabs[index]

    def require(self, tab_id: int) -> TabState:
        tab = self.get(tab_id)
        if tab is None:
            raise TabNotFoundError(tab_id)
        return tab

    # ─── Commands ────────────────────────────────────────────────

    def add_tab(self) -> TabState | None:
        """Open a Home tab and activate it. None when at capacity."""
        if len(self._tabs) >= self.capacity:
            return None
        tab = self._new_tab()
        self._tabs.append(tab)
        self.active_id = tab.id
        return tab

    def close_tab(self, tab_id: int) -> bool:
        """Remove a tab. Returns False (no-op) when it is the only tab."""
        index = self._index_of(tab_id)
        if index is None:
            raise TabNotFoundError(tab_id)
        if len(self._tabs) == 1:
            return False
        del self._tabs[index]
        if self.active_id == tab_id:
            self.active_id = self._tabs[min(index, len(self._tabs) - 1)].id
        return True

    def switch_tab(self, tab_id: int) -> TabState:
        tab = self.require(tab_id)
        self.active_id = tab.id
        return tab

    def set_capacity(self, capacity: int) -> int:
        self.capacity = max(1, int(capacity))
        return self.capacity

    def begin_request(self, tab_id: int) -> RequestId:
        """Issue a fresh request id for a tab's async work."""
        self.require(tab_id)
        request_id = RequestId(self._next_request_id)
        self._next_request_id += 1
        return request_id

    def dispatch(self, tab_id: int, action: TabAction) -> TabState | None:
        """Reduce one action into a tab. None when the tab no longer exists."""
        index = self._index_of(tab_id)
        if index is None:
            return None
        updated = reduce_tab(self._tabs[index], action, self.hosts)
        self._tabs[index] = updated
        return updated
