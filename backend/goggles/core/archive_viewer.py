"""Archive Viewer — the Playback Machine's Home ⇄ Snapshot state machine.

Invariants:
    - State is derived purely from the address it is given (no hidden state)
    - snapshot_state is the single source of the snapshot view; the resolver builds on it
    - submit always yields a decodable archive address, or None for blank or multi-line input
    - The snapshot date comes from the record's archivedDate, else the default date
"""

from dataclasses import dataclass

from goggles.core.address_codec import (
    BrowserHosts, DEFAULT_HOSTS, archive_home_address, banner_date,
    compact_archive_date, encode_archive_address, has_scheme,
)
from goggles.core.content_record import ContentRecord, find_by_address
from goggles.core.domain_types import DEFAULT_ARCHIVE_DATE


@dataclass(frozen=True)
class ArchiveSnapshotState:
    date: str
    inner_address: str
    record: ContentRecord | None
    banner_date: str | None

    @property
    def found(self) -> bool:
        return self.record is not None


def snapshot_state(
    date: str,
    inner: str,
    records: tuple[ContentRecord, ...] | list[ContentRecord],
) -> ArchiveSnapshotState:
    """Snapshot for a decoded archive address; record is None when not archived."""
    record = find_by_address(records, inner)
    return ArchiveSnapshotState(
        date=date,
        inner_address=inner,
        record=record,
        banner_date=banner_date(date, record.archived_date) if record else None,
    )


def submit_archive_search(
    raw: str,
    records: tuple[ContentRecord, ...] | list[ContentRecord],
    hosts: BrowserHosts = DEFAULT_HOSTS,
    default_date: str = DEFAULT_ARCHIVE_DATE,
) -> str | None:
    """Archive address to navigate to for a typed URL. None for blank or multi-line input."""
    text = raw.strip()
    if not text or "\n" in text:
        return None
    inner = text if has_scheme(text) else "https://" + text
    record = find_by_address(records, inner)
    date = (compact_archive_date(record.archived_date) if record else None) or default_date
    return encode_archive_address(date, inner, hosts)


def back_to_home(hosts: BrowserHosts = DEFAULT_HOSTS) -> str:
    return archive_home_address(hosts)
