"""Seed loader and hydration tests — JSON seed files into the result cache."""

import json

import pytest

from goggles.core.errors import SeedValidationError
from goggles.services.cache_hydration import hydrate_cache, reload_cache
from goggles.services.result_cache import ResultCache
from goggles.services.seed_loader import load_seed_file, parse_seed_items

from tests.services.seed_data import SEED_ITEMS


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(SEED_ITEMS, ensure_ascii=False), encoding="utf-8")
    return path


def test_load_seed_file_reads_all_valid_records(seed_file):
    records = load_seed_file(seed_file)
    assert [r.id for r in records] == ["fl-tanaka", "nitta", "old-shop"]


def test_single_object_file_is_accepted(tmp_path):
    path = tmp_path / "one.json"
    path.write_text(json.dumps(SEED_ITEMS[0]), encoding="utf-8")
    assert [r.id for r in load_seed_file(path)] == ["fl-tanaka"]


def test_invalid_items_skipped_by_default():
    items = [SEED_ITEMS[0], {"id": "broken", "title": "No url"}]
    assert [r.id for r in parse_seed_items(items)] == ["fl-tanaka"]


def test_invalid_items_raise_in_strict_mode():
    with pytest.raises(SeedValidationError) as exc_info:
        parse_seed_items([{"id": "broken", "title": "No url"}], strict=True)
    assert exc_info.value.field == "url"


def test_numeric_archived_date_is_skipped():
    item = {**SEED_ITEMS[1], "id": "numeric-date", "archivedDate": 20240315}
    assert [r.id for r in parse_seed_items([SEED_ITEMS[0], item])] == ["fl-tanaka"]


def test_duplicate_ids_keep_first():
    duplicate = {**SEED_ITEMS[1], "id": "fl-tanaka"}
    records = parse_seed_items([SEED_ITEMS[0], duplicate])
    assert len(records) == 1
    assert records[0].title == SEED_ITEMS[0]["title"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(SeedValidationError):
        load_seed_file(tmp_path / "absent.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(SeedValidationError):
        load_seed_file(path)


async def test_hydrate_seeds_empty_cache(memory_store, clock, seed_file):
    cache = ResultCache(memory_store, clock=clock)
    assert await hydrate_cache(cache, str(seed_file)) == 3
    assert cache.is_hydrated


async def test_hydrate_reuses_fresh_persisted_cache(seeded_cache, memory_store, clock, tmp_path):
    cache = ResultCache(memory_store, clock=clock)
    # the seed path is never read when the persisted tier is fresh
    assert await hydrate_cache(cache, str(tmp_path / "absent.json")) == 3


async def test_reload_replaces_collection(seeded_cache, tmp_path):
    path = tmp_path / "small.json"
    path.write_text(json.dumps([SEED_ITEMS[1]]), encoding="utf-8")
    assert await reload_cache(seeded_cache, str(path)) == 1
    assert [r.id for r in await seeded_cache.get()] == ["nitta"]
