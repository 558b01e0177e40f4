"""
Resolve a free-form search term to a single creature.

A caller may name a creature by its ordinal (``"25"``), by its storage
identifier (``"3f2a…"``) or by its name in any casing
(``"Pikachu"``).  Each way of reading the term is a strategy: a
function that either does not apply to the term (returns ``None``
without touching the store) or performs exactly one point query.
Strategies are tried in order and the first one that finds a creature
wins.  A store failure stops resolution immediately.
"""

from __future__ import annotations

import re
from typing import Awaitable, Callable, List, Optional

from creature_catalog.app.core.errors import NotFound, Result
from creature_catalog.app.schemas.creature import MAX_ORDINAL, Creature
from creature_catalog.app.services.creature_repository import CreatureRepository

_ORDINAL = re.compile(r"-?[0-9]+")
_STORAGE_ID = re.compile(r"[0-9a-f]{32}")

Strategy = Callable[[CreatureRepository, str], Awaitable[Optional[Result[Optional[Creature]]]]]


def is_ordinal(term: str) -> bool:
    return _ORDINAL.fullmatch(term) is not None


def is_storage_id(term: str) -> bool:
    return _STORAGE_ID.fullmatch(term) is not None


async def by_ordinal(repository: CreatureRepository, term: str) -> Optional[Result[Optional[Creature]]]:
    if not is_ordinal(term):
        return None
    no = int(term)
    if abs(no) > MAX_ORDINAL:
        return None
    return await repository.find_by_no(no)


async def by_storage_id(repository: CreatureRepository, term: str) -> Optional[Result[Optional[Creature]]]:
    if not is_storage_id(term):
        return None
    return await repository.find_by_id(term)


async def by_name(repository: CreatureRepository, term: str) -> Optional[Result[Optional[Creature]]]:
    return await repository.find_by_name(term.lower())


DEFAULT_STRATEGIES: List[Strategy] = [by_ordinal, by_storage_id, by_name]


class TermResolver:
    """Try each strategy in order until one finds a creature."""

    def __init__(self, repository: CreatureRepository, strategies: Optional[List[Strategy]] = None) -> None:
        self.repository = repository
        self.strategies = list(strategies) if strategies is not None else list(DEFAULT_STRATEGIES)

    async def resolve(self, term: str) -> Result[Creature]:
        for strategy in self.strategies:
            result = await strategy(self.repository, term)
            if result is None:
                continue
            if not result.ok:
                return Result.failure(result.error)
            if result.value is not None:
                return Result.success(result.value)
        return Result.failure(NotFound(term=term))
