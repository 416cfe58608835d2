"""Tab Title — deterministic title for a tab's current location.

Invariants:
    - Home → brand name; SearchResults → query text (brand name if empty)
    - Archive/external → parsed host name of the visited address
    - Unparseable addresses → UNTITLED_TAB_TITLE, never an exception
"""

from goggles.core.address_codec import (
    ArchiveSnapshot, BrowserHosts, DEFAULT_HOSTS, Home, Location, SearchResults,
    display_address, host_of,
)
from goggles.core.domain_types import BRAND_NAME, UNTITLED_TAB_TITLE


def derive_title(
    location: Location, query: str | None = None,
    hosts: BrowserHosts = DEFAULT_HOSTS,
) -> str:
    if isinstance(location, Home):
        return BRAND_NAME
    if isinstance(location, SearchResults):
        return (query or "").strip() or BRAND_NAME
    if isinstance(location, ArchiveSnapshot):
        return host_of(display_address(location, hosts=hosts)) or UNTITLED_TAB_TITLE
    return host_of(location.raw) or UNTITLED_TAB_TITLE
