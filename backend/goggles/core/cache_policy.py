"""Cache Policy — pure freshness and (de)serialization rules for the persisted cache slot.

Invariants:
    - A slot is fresh iff now - fetched_at < ttl (strict; equal means expired)
    - decode_slot never raises: corrupt payloads decode to None
    - decode_slot returns all records or None, never a subset

Design Decisions:
    - Timestamps are integer milliseconds since epoch, stored as strings
      (same two-value layout as the game client's browser storage)
"""

import json

from goggles.core.content_record import ContentRecord
from goggles.core.domain_types import CACHE_TTL_MS


def is_fresh(fetched_at_ms: int, now_ms: int, ttl_ms: int = CACHE_TTL_MS) -> bool:
    return now_ms - fetched_at_ms < ttl_ms


def encode_records(records: list[ContentRecord]) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


def encode_timestamp(now_ms: int) -> str:
    return str(int(now_ms))


def decode_timestamp(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def decode_records(raw: str | None) -> list[ContentRecord] | None:
    """Parse a serialized collection. None on any corruption."""
    if not raw:
        return None
    try:
        items = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(items, list):
        return None
    records = []
    for item in items:
        if not isinstance(item, dict):
            return None
        try:
            records.append(ContentRecord.from_dict(item))
        except (KeyError, TypeError, ValueError):
            return None
    return records


def decode_slot(
    payload: str | None, timestamp: str | None,
) -> tuple[list[ContentRecord], int] | None:
    """Decode both slot values. None when either is missing or corrupt."""
    fetched_at = decode_timestamp(timestamp)
    if fetched_at is None:
        return None
    records = decode_records(payload)
    if records is None:
        return None
    return records, fetched_at
