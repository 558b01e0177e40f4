from __future__ import annotations

import logging
from pathlib import Path

import pytest

from creature_catalog.app.core.db import get_cursor
from creature_catalog.app.core.errors import DuplicateKey, Unavailable
from creature_catalog.app.services.creature_repository import CreatureRepository
from creature_catalog.app.services.pagination import PageRequest


@pytest.mark.asyncio
async def test_insert_assigns_distinct_storage_ids(repository: CreatureRepository) -> None:
    first = await repository.insert("bulbasaur", 1)
    second = await repository.insert("ivysaur", 2)

    assert first.ok and second.ok
    assert len(first.value.id) == 32
    assert first.value.id != second.value.id


@pytest.mark.asyncio
async def test_point_lookups_return_the_same_document(repository: CreatureRepository) -> None:
    created = (await repository.insert("bulbasaur", 1)).value

    assert (await repository.find_by_no(1)).value == created
    assert (await repository.find_by_id(created.id)).value == created
    assert (await repository.find_by_name("bulbasaur")).value == created


@pytest.mark.asyncio
async def test_point_lookup_miss_is_a_successful_none(repository: CreatureRepository) -> None:
    result = await repository.find_by_name("missingno")

    assert result.ok
    assert result.value is None


@pytest.mark.asyncio
async def test_duplicate_name_is_reported_with_the_colliding_value(repository: CreatureRepository) -> None:
    await repository.insert("bulbasaur", 1)

    result = await repository.insert("bulbasaur", 3)

    assert isinstance(result.error, DuplicateKey)
    assert result.error.fields == {"name": "bulbasaur"}


@pytest.mark.asyncio
async def test_duplicate_ordinal_is_reported_with_the_colliding_value(repository: CreatureRepository) -> None:
    await repository.insert("bulbasaur", 1)

    result = await repository.insert("ivysaur", 1)

    assert isinstance(result.error, DuplicateKey)
    assert result.error.fields == {"no": 1}


@pytest.mark.asyncio
async def test_update_by_id_reports_matched_rows(repository: CreatureRepository) -> None:
    created = (await repository.insert("bulbasaur", 1)).value

    assert (await repository.update_by_id(created.id, {"name": "venusaur"})).value == 1
    assert (await repository.update_by_id("0" * 32, {"name": "ivysaur"})).value == 0
    assert (await repository.find_by_id(created.id)).value.name == "venusaur"


@pytest.mark.asyncio
async def test_update_by_id_never_changes_the_storage_id(repository: CreatureRepository) -> None:
    created = (await repository.insert("bulbasaur", 1)).value

    result = await repository.update_by_id(created.id, {"id": "f" * 32})

    assert result.value == 0
    assert (await repository.find_by_id(created.id)).value == created


@pytest.mark.asyncio
async def test_update_into_an_existing_ordinal_is_a_duplicate(repository: CreatureRepository) -> None:
    await repository.insert("bulbasaur", 1)
    ivysaur = (await repository.insert("ivysaur", 2)).value

    result = await repository.update_by_id(ivysaur.id, {"no": 1})

    assert isinstance(result.error, DuplicateKey)
    assert result.error.fields == {"no": 1}


@pytest.mark.asyncio
async def test_delete_by_id_reports_deleted_count(repository: CreatureRepository) -> None:
    created = (await repository.insert("bulbasaur", 1)).value

    assert (await repository.delete_by_id(created.id)).value == 1
    assert (await repository.delete_by_id(created.id)).value == 0


@pytest.mark.asyncio
async def test_find_page_orders_by_ordinal(repository: CreatureRepository) -> None:
    for name, no in [("charmander", 4), ("bulbasaur", 1), ("venusaur", 3), ("ivysaur", 2)]:
        await repository.insert(name, no)

    page = await repository.find_page(PageRequest(limit=2, offset=1))

    assert [c.no for c in page.value] == [2, 3]


@pytest.mark.asyncio
async def test_find_page_with_zero_limit_is_unbounded(repository: CreatureRepository) -> None:
    for no in range(1, 8):
        await repository.insert(f"creature-{no}", no)

    page = await repository.find_page(PageRequest(limit=0, offset=2))

    assert [c.no for c in page.value] == [3, 4, 5, 6, 7]


@pytest.mark.asyncio
async def test_store_failure_is_logged_and_reported_without_detail(tmp_path: Path, caplog) -> None:
    # init_db was never run against this store.
    repository = CreatureRepository(str(tmp_path / "empty.db"))

    with caplog.at_level(logging.ERROR, logger="creature_catalog.app.services.creature_repository"):
        result = await repository.insert("bulbasaur", 1)

    assert isinstance(result.error, Unavailable)
    assert "no such table" not in result.error.message
    assert any(r.exc_info for r in caplog.records)


@pytest.mark.asyncio
async def test_find_page_limit_beyond_store_integers_is_unbounded(repository: CreatureRepository) -> None:
    for no in range(1, 4):
        await repository.insert(f"creature-{no}", no)

    page = await repository.find_page(PageRequest(limit=10**20, offset=1))

    assert [c.no for c in page.value] == [2, 3]


@pytest.mark.asyncio
async def test_find_page_offset_beyond_store_integers_is_empty(repository: CreatureRepository, caplog) -> None:
    await repository.insert("bulbasaur", 1)

    with caplog.at_level(logging.ERROR):
        page = await repository.find_page(PageRequest(limit=5, offset=10**20))

    assert page.ok
    assert list(page.value) == []
    assert caplog.records == []


def test_collection_holds_only_document_fields(database_url: str) -> None:
    with get_cursor(database_url) as cursor:
        columns = [row["name"] for row in cursor.execute("PRAGMA table_info(creatures)")]

    assert columns == ["id", "name", "no"]
