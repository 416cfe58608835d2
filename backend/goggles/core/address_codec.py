"""Address Codec — parses raw address strings into typed Locations and back.

Invariants:
    - parse_address never raises: malformed input becomes ExternalAddress(raw)
    - decode_archive_address(encode_archive_address(d, a)) == (d, a) for any 8-digit d
    - A bare keyword (no scheme, no dot) is never promoted to an address
    - The search query travels next to the Location, never inside it

Design Decisions:
    - Archive addresses matched with a regex on the full string, not urlsplit: the inner
      address may carry its own query string and must survive untouched
    - Hosts injected via BrowserHosts (frozen): core stays free of settings imports
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from urllib.parse import parse_qs, quote, urlsplit

from goggles.core.domain_types import LocationKind


_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_DATE_RE = re.compile(r"^\d{8}$")
_HOST_LABEL_RE = re.compile(r"^[\w-]+(\.[\w-]+)*$", re.UNICODE)
_SEARCH_PATH = "/search"


@dataclass(frozen=True)
class BrowserHosts:
    """Host names of the simulated services."""
    search_host: str = "www.goggles.com"
    search_host_aliases: tuple[str, ...] = ("goggles.com",)
    archive_host: str = "playback.archive"
    mail_host: str = "mail.goggles.com"

    @property
    def search_hosts(self) -> frozenset[str]:
        return frozenset({self.search_host, *self.search_host_aliases})


DEFAULT_HOSTS = BrowserHosts()


# ─── Locations ───────────────────────────────────────────────────

@dataclass(frozen=True)
class Home:
    kind: LocationKind = field(default=LocationKind.HOME, init=False)


@dataclass(frozen=True)
class SearchResults:
    kind: LocationKind = field(default=LocationKind.SEARCH_RESULTS, init=False)


@dataclass(frozen=True)
class ArchiveSnapshot:
    date: str
    inner_address: str
    kind: LocationKind = field(default=LocationKind.ARCHIVE_SNAPSHOT, init=False)


@dataclass(frozen=True)
class ExternalAddress:
    raw: str
    kind: LocationKind = field(default=LocationKind.EXTERNAL, init=False)


Location = Home | SearchResults | ArchiveSnapshot | ExternalAddress


@dataclass(frozen=True)
class ParsedAddress:
    """Classification result: the Location plus the search query, if any."""
    location: Location
    query: str | None = None


# ─── Input normalization ─────────────────────────────────────────

def has_scheme(raw: str) -> bool:
    return bool(_SCHEME_RE.match(raw.strip()))


def is_bare_keyword(raw: str) -> bool:
    """No scheme and no dot: a search term, never an address."""
    text = raw.strip()
    return not has_scheme(text) and "." not in text


def normalize_input(raw: str) -> str:
    """Strip and prefix https:// onto scheme-less host-like input.

    Bare keywords and whitespace-containing text are returned stripped but
    otherwise untouched, so the resolver can reject them.
    """
    text = raw.strip()
    if not text or has_scheme(text) or is_bare_keyword(text):
        return text
    if any(ch.isspace() for ch in text):
        return text
    return "https://" + text


def is_valid_url(address: str) -> bool:
    """http(s) scheme, a syntactically plausible host, no whitespace."""
    if not address or any(ch.isspace() for ch in address):
        return False
    try:
        parsed = urlsplit(address)
        hostname = parsed.hostname
        parsed.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    if parsed.scheme.lower() not in ("http", "https") or not hostname:
        return False
    return bool(_HOST_LABEL_RE.match(hostname))


def host_of(address: str) -> str | None:
    try:
        return urlsplit(address).hostname or None
    except ValueError:
        return None


def guess_host(address: str) -> str:
    """Best-guess host for error pages: parsed hostname, else text before the first slash."""
    host = host_of(address)
    if host:
        return host
    return re.sub(r"^https?://", "", address.strip()).split("/")[0]


# ─── Archive encoding ────────────────────────────────────────────

@lru_cache(maxsize=8)
def _archive_pattern(archive_host: str) -> re.Pattern:
    return re.compile(
        rf"^https?://{re.escape(archive_host)}/web/(\d{{8}})/(.+)$",
        re.IGNORECASE,
    )


def encode_archive_address(
    date: str, inner_address: str, hosts: BrowserHosts = DEFAULT_HOSTS,
) -> str:
    """Build https://<archive-host>/web/<YYYYMMDD>/<inner>. Raises ValueError on bad input."""
    if not _DATE_RE.match(date):
        raise ValueError(f"archive date must be 8 digits (YYYYMMDD), got {date!r}")
    if not inner_address:
        raise ValueError("inner address must be non-empty")
    if inner_address != inner_address.strip() or "\n" in inner_address:
        raise ValueError(f"inner address must be a single trimmed line, got {inner_address!r}")
    return f"https://{hosts.archive_host}/web/{date}/{inner_address}"


def decode_archive_address(
    address: str, hosts: BrowserHosts = DEFAULT_HOSTS,
) -> tuple[str, str] | None:
    """Exact inverse of encode_archive_address. None when the address is not a snapshot."""
    match = _archive_pattern(hosts.archive_host).match(address.strip())
    if not match:
        return None
    return match.group(1), match.group(2)


def format_archive_date(date: str) -> str:
    """20240315 -> 2024-03-15. Already-dashed or odd values pass through."""
    if _DATE_RE.match(date):
        return f"{date[:4]}-{date[4:6]}-{date[6:]}"
    return date


def banner_date(requested_date: str, archived_date: str | None) -> str:
    """Date shown on the snapshot banner: the record's own archivedDate wins."""
    if archived_date:
        return format_archive_date(archived_date)
    return format_archive_date(requested_date)


def compact_archive_date(date: str | None) -> str | None:
    """2024-03-15 -> 20240315. None when the result is not 8 digits."""
    if not date:
        return None
    compact = date.replace("-", "").strip()
    return compact if _DATE_RE.match(compact) else None


# ─── Addresses of the simulated services ─────────────────────────

def home_address(hosts: BrowserHosts = DEFAULT_HOSTS) -> str:
    return f"https://{hosts.search_host}"


def search_address(query: str, hosts: BrowserHosts = DEFAULT_HOSTS) -> str:
    return f"https://{hosts.search_host}{_SEARCH_PATH}?q={quote(query, safe='')}"


def archive_home_address(hosts: BrowserHosts = DEFAULT_HOSTS) -> str:
    return f"https://{hosts.archive_host}/"


def display_address(
    location: Location, query: str | None = None,
    hosts: BrowserHosts = DEFAULT_HOSTS,
) -> str:
    """Address bar text for a location."""
    if isinstance(location, Home):
        return home_address(hosts)
    if isinstance(location, SearchResults):
        return search_address(query or "", hosts)
    if isinstance(location, ArchiveSnapshot):
        return encode_archive_address(location.date, location.inner_address, hosts)
    return location.raw


# ─── Classification ──────────────────────────────────────────────

def parse_address(raw: str, hosts: BrowserHosts = DEFAULT_HOSTS) -> ParsedAddress:
    """Classify a raw address. Never raises."""
    address = raw.strip()

    snapshot = decode_archive_address(address, hosts)
    if snapshot:
        date, inner = snapshot
        return ParsedAddress(ArchiveSnapshot(date=date, inner_address=inner))

    try:
        parsed = urlsplit(address)
        hostname = (parsed.hostname or "").lower()
    except ValueError:
        return ParsedAddress(ExternalAddress(raw=address))

    if parsed.scheme.lower() in ("http", "https") and hostname in hosts.search_hosts:
        if parsed.path in ("", "/"):
            return ParsedAddress(Home())
        if parsed.path == _SEARCH_PATH:
            query = parse_qs(parsed.query).get("q", [""])[0].strip()
            if query:
                return ParsedAddress(SearchResults(), query=query)

    return ParsedAddress(ExternalAddress(raw=address))
