"""Seed Loader — reads the pre-seeded record collection from a JSON file.

Invariants:
    - The file may hold a list of records or a single record object
    - Invalid items are logged and skipped; strict=True raises SeedValidationError instead
    - Duplicate ids keep the first occurrence
    - A missing or unparseable file raises SeedValidationError (nothing to serve)
"""

import json
import logging
from pathlib import Path

from goggles.core.content_record import ContentRecord, validate_record_data
from goggles.core.errors import SeedValidationError

logger = logging.getLogger(__name__)


def parse_seed_items(data: object, strict: bool = False) -> list[ContentRecord]:
    items = data if isinstance(data, list) else [data]
    records: list[ContentRecord] = []
    seen_ids: set[str] = set()
    for position, item in enumerate(items):
        error = validate_record_data(item)
        if error:
            message = f"Seed item {position}: {error['message']}"
            if strict:
                raise SeedValidationError(message, error["field"])
            logger.warning(message, extra={"error_code": "SEED_VALIDATION_ERROR"})
            continue
        record = ContentRecord.from_dict(item)
        if record.id in seen_ids:
            logger.warning(f"Seed item {position}: duplicate id '{record.id}' skipped")
            continue
        seen_ids.add(record.id)
        records.append(record)
    return records


def load_seed_file(path: str | Path, strict: bool = False) -> list[ContentRecord]:
    seed_path = Path(path)
    try:
        raw = seed_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SeedValidationError(f"Seed file unreadable: {seed_path} ({e})", "path")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SeedValidationError(f"Seed file is not valid JSON: {e}", "path")
    records = parse_seed_items(data, strict)
    logger.info(
        f"Seed file loaded: {seed_path}", extra={"record_count": len(records)},
    )
    return records
