"""Content Record — the unit stored in the result cache and consumed by renderers.

Invariants:
    - ContentRecord is immutable once built
    - address is the exact lookup key (no normalization after load)
    - domain_status == "expired" forces the error page regardless of template
    - from_dict/to_dict round-trip the persisted (camelCase) shape

Design Decisions:
    - Frozen dataclass, not ORM: records live in the cache tiers as JSON, never as rows
    - Accepts both "url" (seed files) and "address" keys on input, writes "url" on output
      so persisted slots stay readable by the game client
"""

from dataclasses import dataclass, field
from typing import Any

from goggles.core.domain_types import DomainStatus, ResultType, Template

REQUIRED_FIELDS: tuple[str, ...] = (
    "id", "title", "url", "description", "template", "content",
)

_SOCIAL_TEMPLATES = frozenset({
    Template.FACELOOK_PROFILE, Template.LINKEDIN_PROFILE, Template.RANKEDON_PROFILE,
})
_CORPORATE_TEMPLATES = frozenset({Template.ABC_CORP})
_NEWS_TEMPLATES = frozenset({Template.NYAHOO_NEWS, Template.YUHI_SHINBUN})
_PERSONAL_TEMPLATES = frozenset({Template.NITTA_BLOG, Template.PRODUCT_REVIEW_BLOG})


@dataclass(frozen=True)
class ContentRecord:
    """One simulated page: searchable fields, template, and page-specific content."""
    id: str
    address: str
    template: str
    title: str = ""
    description: str = ""
    keywords: tuple[str, ...] = ()
    content: dict[str, Any] = field(default_factory=dict)
    archived_date: str | None = None
    domain_status: str | None = None

    @property
    def is_expired(self) -> bool:
        return self.domain_status == DomainStatus.EXPIRED.value

    @property
    def template_kind(self) -> Template | None:
        return Template.from_name(self.template)

    @property
    def result_type(self) -> ResultType:
        """Icon category for search result listings."""
        kind = self.template_kind
        if kind in _SOCIAL_TEMPLATES:
            return ResultType.SOCIAL
        if kind in _CORPORATE_TEMPLATES:
            return ResultType.CORPORATE
        if kind in _NEWS_TEMPLATES:
            return ResultType.NEWS
        if kind in _PERSONAL_TEMPLATES:
            return ResultType.PERSONAL
        return ResultType.DIRECTORY

    @classmethod
    def from_dict(cls, data: dict) -> "ContentRecord":
        """Build from a seed/persisted dict. Raises ValueError/TypeError on bad shape."""
        address = data.get("url") or data.get("address")
        if not address or not isinstance(address, str):
            raise ValueError("record has no url")
        keywords = data.get("keywords") or []
        if not isinstance(keywords, list):
            raise TypeError("keywords must be a list")
        content = data.get("content") or {}
        if not isinstance(content, dict):
            raise TypeError("content must be an object")
        for key in ("archivedDate", "domainStatus"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string")
        return cls(
            id=str(data["id"]),
            address=address,
            template=str(data.get("template") or ""),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            keywords=tuple(str(k) for k in keywords),
            content=content,
            archived_date=data.get("archivedDate"),
            domain_status=data.get("domainStatus"),
        )

    def to_dict(self) -> dict:
        """Persisted shape (camelCase, "url" key)."""
        data: dict[str, Any] = {
            "id": self.id,
            "url": self.address,
            "template": self.template,
            "title": self.title,
            "description": self.description,
            "keywords": list(self.keywords),
            "content": self.content,
        }
        if self.archived_date is not None:
            data["archivedDate"] = self.archived_date
        if self.domain_status is not None:
            data["domainStatus"] = self.domain_status
        return data

    def to_summary(self) -> dict:
        """Search-listing shape: no page content."""
        return {
            "id": self.id,
            "title": self.title,
            "url": self.address,
            "description": self.description,
            "type": self.result_type.value,
        }


def validate_record_data(data: object) -> dict | None:
    """Check a raw seed item. Pure — returns error descriptor or None."""
    if not isinstance(data, dict):
        return _error("record", "Record must be a JSON object.")
    for name in REQUIRED_FIELDS:
        if data.get(name) in (None, ""):
            return _error(name, f"Missing required field '{name}'.")
    if not isinstance(data["content"], dict):
        return _error("content", "Field 'content' must be an object.")
    keywords = data.get("keywords")
    if keywords is not None and not isinstance(keywords, list):
        return _error("keywords", "Field 'keywords' must be a list.")
    archived = data.get("archivedDate")
    if archived is not None and not isinstance(archived, str):
        return _error("archivedDate", "Field 'archivedDate' must be a string.")
    status = data.get("domainStatus")
    if status is not None and not isinstance(status, str):
        return _error("domainStatus", "Field 'domainStatus' must be a string.")
    if status is not None and status not in {s.value for s in DomainStatus}:
        return _error("domainStatus", f"Unknown domainStatus '{status}'.")
    return None


def _error(field_name: str, message: str) -> dict:
    return {"status": "error", "field": field_name, "message": message}


def find_by_address(
    records: list[ContentRecord] | tuple[ContentRecord, ...], address: str,
) -> ContentRecord | None:
    """Exact address match, first hit wins. No partial matching."""
    for record in records:
        if record.address == address:
            return record
    return None
