"""Domain Types — rich types that replace bare primitives across the browser core.

Invariants:
    - TabId and RequestId wrap int — never pass bare ints between tabs and requests
    - ArchiveDate is always 8 digits (YYYYMMDD) once it leaves address_codec
    - All valid states encoded as Enums — no raw string matching in resolver/renderer

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (API returns views as JSON)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TabId = NewType("TabId", int)
RequestId = NewType("RequestId", int)


# ─── Value Types ─────────────────────────────────────────────────

ArchiveDate = NewType("ArchiveDate", str)   # YYYYMMDD


# ─── Constants ───────────────────────────────────────────────────

BRAND_NAME = "Goggles"
UNTITLED_TAB_TITLE = "Untitled"
CACHE_TTL_MS = 3_600_000
RESULTS_PAGE_SIZE = 10
DEFAULT_MAX_TABS = 10
DEFAULT_ARCHIVE_DATE = ArchiveDate("20240101")
NAME_NOT_RESOLVED = "ERR_NAME_NOT_RESOLVED"

# Persisted slot keys (kept identical to the browser-storage keys of the game client)
SEARCH_CACHE_KEY = "osint-game-search-cache"
CACHE_TIMESTAMP_KEY = "osint-game-cache-timestamp"


# ─── Enums ───────────────────────────────────────────────────────

class LocationKind(str, Enum):
    """Closed set of classified address kinds."""
    HOME = "home"
    SEARCH_RESULTS = "search_results"
    ARCHIVE_SNAPSHOT = "archive_snapshot"
    EXTERNAL = "external"


class PageKind(str, Enum):
    """What the resolver decided to show for a location."""
    HOME = "home"
    SEARCH_RESULTS = "search_results"
    CONTENT = "content"
    ARCHIVE_HOME = "archive_home"
    ARCHIVE_SNAPSHOT = "archive_snapshot"
    NO_ARCHIVE = "no_archive"
    MAIL = "mail"
    ERROR = "error"
    PLACEHOLDER = "placeholder"
    CACHE_UNAVAILABLE = "cache_unavailable"


class DomainStatus(str, Enum):
    """Record-level domain state. EXPIRED forces the error page."""
    ACTIVE = "active"
    EXPIRED = "expired"


class MailEntry(str, Enum):
    """Always-available mail service entry points."""
    LOGIN = "login"
    SERVICE = "service"


class Template(str, Enum):
    """Closed set of page templates a ContentRecord may name.

    Values are the renderer component names used by the game client.
    """
    ABC_CORP = "AbcCorpPage"
    BBS_THREAD = "BBSThreadPage"
    CHIITA = "ChiitaPage"
    COMPANY_REVIEW = "CompanyReviewPage"
    DICTIONARY = "DictionaryPage"
    ELEMENTARY_SCHOOL = "ElementarySchoolPage"
    FACELOOK_PROFILE = "FacelookProfilePage"
    HIGH_SCHOOL = "HighSchoolPage"
    JUNIOR_HIGH_SCHOOL = "JuniorHighSchoolPage"
    KYET = "KyetPage"
    LINKEDIN_PROFILE = "LinkedInProfilePage"
    NITTA_BLOG = "NittaBlogPage"
    NYAHOO_NEWS = "NyahooNewsPage"
    NYAHOO_QUESTION = "NyahooQuestionPage"
    OSINTRICKS_HOME = "OSINTricksHomePage"
    PRODUCT_REVIEW_BLOG = "ProductReviewBlogPage"
    RANKEDON_PROFILE = "RankedOnProfilePage"
    SCHOOL_REVIEW = "SchoolReviewPage"
    SURNAME_FORTUNE = "SurnameFortunePage"
    UNIVERSITY = "UniversityPage"
    USOPEDIA = "UsopediaPage"
    YUHI_SHINBUN = "YuhiShinbunPage"
    GENERIC = "GenericPage"
    PLAYBACK_MACHINE = "PlaybackMachinePage"

    @classmethod
    def from_name(cls, name: str | None) -> "Template | None":
        """Return the matching Template, or None for unknown names (never raises)."""
        if not name:
            return None
        try:
            return cls(name)
        except ValueError:
            return None


class ResultType(str, Enum):
    """Search result icon category, derived from the record template."""
    CORPORATE = "corporate"
    SOCIAL = "social"
    NEWS = "news"
    PERSONAL = "personal"
    DIRECTORY = "directory"
