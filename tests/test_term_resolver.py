from __future__ import annotations

import uuid
from typing import Dict, List, Optional, Tuple

import pytest

from creature_catalog.app.core.errors import ErrorKind, NotFound, Result, Unavailable
from creature_catalog.app.schemas.creature import Creature
from creature_catalog.app.services.term_resolver import (
    TermResolver,
    by_name,
    by_ordinal,
    is_ordinal,
    is_storage_id,
)

PIKACHU = Creature(id=uuid.uuid4().hex, name="pikachu", no=25)


class _RecordingRepository:
    """Answers point lookups from dicts and records every query."""

    def __init__(
        self,
        by_no: Optional[Dict[int, Creature]] = None,
        by_id: Optional[Dict[str, Creature]] = None,
        by_name: Optional[Dict[str, Creature]] = None,
        fail: bool = False,
    ) -> None:
        self.by_no = by_no or {}
        self.by_id = by_id or {}
        self.by_name = by_name or {}
        self.fail = fail
        self.calls: List[Tuple[str, object]] = []

    def _answer(self, found: Optional[Creature]) -> Result[Optional[Creature]]:
        if self.fail:
            return Result.failure(Unavailable())
        return Result.success(found)

    async def find_by_no(self, no: int) -> Result[Optional[Creature]]:
        self.calls.append(("no", no))
        return self._answer(self.by_no.get(no))

    async def find_by_id(self, storage_id: str) -> Result[Optional[Creature]]:
        self.calls.append(("id", storage_id))
        return self._answer(self.by_id.get(storage_id))

    async def find_by_name(self, name: str) -> Result[Optional[Creature]]:
        self.calls.append(("name", name))
        return self._answer(self.by_name.get(name))


@pytest.mark.parametrize("term", ["25", "0", "-3", "007"])
def test_is_ordinal_accepts_integer_literals(term: str) -> None:
    assert is_ordinal(term)


@pytest.mark.parametrize("term", ["", "1.5", "1e3", " 25", "25 ", "0x19", "pikachu", "٣", "２５"])
def test_is_ordinal_rejects_everything_else(term: str) -> None:
    assert not is_ordinal(term)


def test_is_storage_id_matches_generated_ids_only() -> None:
    assert is_storage_id(uuid.uuid4().hex)
    assert not is_storage_id(uuid.uuid4().hex.upper())
    assert not is_storage_id(str(uuid.uuid4()))
    assert not is_storage_id("pikachu")


@pytest.mark.asyncio
async def test_numeric_term_is_looked_up_by_ordinal_only() -> None:
    repo = _RecordingRepository(by_no={25: PIKACHU})

    result = await TermResolver(repo).resolve("25")

    assert result.value == PIKACHU
    assert repo.calls == [("no", 25)]


@pytest.mark.asyncio
async def test_id_shaped_term_is_looked_up_by_storage_id() -> None:
    repo = _RecordingRepository(by_id={PIKACHU.id: PIKACHU})

    result = await TermResolver(repo).resolve(PIKACHU.id)

    assert result.value == PIKACHU
    assert repo.calls == [("id", PIKACHU.id)]


@pytest.mark.asyncio
async def test_name_lookup_is_case_insensitive() -> None:
    repo = _RecordingRepository(by_name={"pikachu": PIKACHU})

    result = await TermResolver(repo).resolve("PiKaChU")

    assert result.value == PIKACHU
    assert repo.calls == [("name", "pikachu")]


@pytest.mark.asyncio
async def test_numeric_miss_falls_through_to_name() -> None:
    repo = _RecordingRepository()

    result = await TermResolver(repo).resolve("7")

    assert isinstance(result.error, NotFound)
    assert repo.calls == [("no", 7), ("name", "7")]


@pytest.mark.asyncio
async def test_unknown_term_yields_not_found_naming_the_term() -> None:
    result = await TermResolver(_RecordingRepository()).resolve("doesnotexist")

    assert not result.ok
    assert result.error.kind is ErrorKind.NOT_FOUND
    assert "doesnotexist" in result.error.message


@pytest.mark.asyncio
async def test_store_failure_stops_resolution() -> None:
    repo = _RecordingRepository(fail=True)

    result = await TermResolver(repo).resolve("25")

    assert isinstance(result.error, Unavailable)
    assert repo.calls == [("no", 25)]


@pytest.mark.asyncio
async def test_oversized_ordinal_skips_ordinal_lookup() -> None:
    repo = _RecordingRepository()
    term = "9" * 30

    await TermResolver(repo).resolve(term)

    assert repo.calls == [("name", term)]


@pytest.mark.asyncio
async def test_custom_strategy_order_is_respected() -> None:
    repo = _RecordingRepository(by_no={25: PIKACHU}, by_name={"25": PIKACHU})

    result = await TermResolver(repo, strategies=[by_name, by_ordinal]).resolve("25")

    assert result.value == PIKACHU
    assert repo.calls == [("name", "25")]
