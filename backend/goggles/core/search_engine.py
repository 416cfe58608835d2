"""Search Engine — case-insensitive matching over cached records with typo correction.

Invariants:
    - Pure function: no IO, no async, no DB
    - Searching an empty record collection raises CacheUnavailableError, never returns []
    - Records whose domain is expired never appear in results
    - skip_suggestion=True disables correction entirely (accepting a suggestion cannot loop)
    - Suggestion is offered only when the corrected query adds at least one new record

Design Decisions:
    - Substring match over title, description, keywords (same fields the seed data carries)
    - Correction metric: optimal string alignment distance (rapidfuzz), so a single
      transposition like "faceloko" -> "facelook" costs 1
    - Tie-break on (distance, length difference, lowercase keyword): deterministic
    - Results keep record order; no shuffling (deterministic tests and replays)
"""

from dataclasses import dataclass

from rapidfuzz.distance import OSA

from goggles.core.address_codec import BrowserHosts, DEFAULT_HOSTS, archive_home_address
from goggles.core.content_record import ContentRecord
from goggles.core.domain_types import Template
from goggles.core.errors import CacheUnavailableError

SUGGESTION_THRESHOLD = 3
MIN_CORRECTABLE_LENGTH = 3
ARCHIVE_QUERY_HINTS: tuple[str, ...] = (
    "playback", "archive", "wayback", "cache", "アーカイブ", "過去", "キャッシュ",
)
PLAYBACK_RESULT_ID = "playback-machine-static"


@dataclass(frozen=True)
class SuggestionInfo:
    original: str
    suggested: str

    def to_dict(self) -> dict:
        return {"original": self.original, "suggested": self.suggested}


@dataclass(frozen=True)
class SearchOutcome:
    results: tuple[ContentRecord, ...]
    suggestion: SuggestionInfo | None = None


def record_matches(record: ContentRecord, query: str) -> bool:
    """Case-insensitive substring match on title, description, or any keyword."""
    needle = query.lower()
    if needle in record.title.lower() or needle in record.description.lower():
        return True
    return any(needle in keyword.lower() for keyword in record.keywords)


def match_records(records: list[ContentRecord], query: str) -> list[ContentRecord]:
    return [
        r for r in records
        if not r.is_expired and record_matches(r, query)
    ]


def known_keywords(records: list[ContentRecord]) -> list[str]:
    """Correction vocabulary: every keyword and each word of multi-word keywords.

    First spelling wins for case-insensitive duplicates.
    """
    seen: dict[str, str] = {}
    for record in records:
        if record.is_expired:
            continue
        for keyword in record.keywords:
            for term in (keyword, *keyword.split()):
                term = term.strip()
                if term and term.lower() not in seen:
                    seen[term.lower()] = term
    return list(seen.values())


def max_correction_distance(query: str) -> int:
    return 1 if len(query) <= 4 else 2


def suggest_query(query: str, vocabulary: list[str]) -> str | None:
    """Closest vocabulary term within the allowed edit distance, or None."""
    needle = query.strip().lower()
    if len(needle) < MIN_CORRECTABLE_LENGTH:
        return None
    limit = max_correction_distance(needle)
    best: tuple[int, int, str] | None = None
    best_term: str | None = None
    for term in vocabulary:
        candidate = term.lower()
        if candidate == needle:
            continue
        distance = OSA.distance(needle, candidate, score_cutoff=limit)
        if distance > limit:
            continue
        rank = (distance, abs(len(candidate) - len(needle)), candidate)
        if best is None or rank < best:
            best, best_term = rank, term
    return best_term


def is_archive_query(query: str) -> bool:
    lowered = query.lower()
    return any(hint in lowered for hint in ARCHIVE_QUERY_HINTS)


def playback_machine_result(hosts: BrowserHosts = DEFAULT_HOSTS) -> ContentRecord:
    """Synthetic listing for the archive viewer, added to archive-related queries."""
    return ContentRecord(
        id=PLAYBACK_RESULT_ID,
        address=archive_home_address(hosts),
        template=Template.PLAYBACK_MACHINE.value,
        title="Playback Machine - Internet Archive",
        description=(
            "Browse archived snapshots of past web pages, "
            "including deleted pages and expired domains."
        ),
    )


def search(
    records: list[ContentRecord],
    query: str,
    skip_suggestion: bool = False,
    hosts: BrowserHosts = DEFAULT_HOSTS,
) -> SearchOutcome:
    """Match query against records; under-matches may be widened by a corrected query."""
    if not records:
        raise CacheUnavailableError()

    text = query.strip()
    if not text:
        return SearchOutcome(results=())

    results = match_records(records, text)
    suggestion = None
    if not skip_suggestion and len(results) < SUGGESTION_THRESHOLD:
        corrected = suggest_query(text, known_keywords(records))
        if corrected:
            known_ids = {r.id for r in results}
            added = [r for r in match_records(records, corrected) if r.id not in known_ids]
            if added:
                results = results + added
                suggestion = SuggestionInfo(original=text, suggested=corrected)

    if is_archive_query(text):
        results = [playback_machine_result(hosts), *results]
    return SearchOutcome(results=tuple(results), suggestion=suggestion)
