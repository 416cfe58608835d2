"""Page View — the resolver's typed output.

Invariants:
    - kind is always a PageKind; renderable is always {"component", "props"}
    - error is set iff kind in (ERROR, NO_ARCHIVE, CACHE_UNAVAILABLE)
    - outcome (search results) is set iff kind == SEARCH_RESULTS
"""

from dataclasses import dataclass

from goggles.core.content_record import ContentRecord
from goggles.core.domain_types import PageKind
from goggles.core.errors import BrowserError
from goggles.core.search_engine import SearchOutcome
from goggles.core.search_pagination import ResultPage


@dataclass(frozen=True)
class PageView:
    kind: PageKind
    address: str
    renderable: dict
    record: ContentRecord | None = None
    banner_date: str | None = None
    error: BrowserError | None = None
    outcome: SearchOutcome | None = None
    page: ResultPage | None = None

    @property
    def error_code(self) -> str | None:
        return self.error.code if self.error else None

    @property
    def host(self) -> str | None:
        return self.error.context.host if self.error else None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "address": self.address,
            "record_id": self.record.id if self.record else None,
            "banner_date": self.banner_date,
            "error_code": self.error_code,
            "host": self.host,
            "renderable": self.renderable,
        }
