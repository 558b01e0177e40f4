"""
Service layer for the creature catalog.

``CreatureService`` implements create, list, resolve, update and
delete on top of :class:`CreatureRepository`.  It owns name
normalisation (names are always stored lower-case) and delegates term
resolution and pagination to :class:`TermResolver` and
:class:`PaginationPolicy`.

Every operation returns a :class:`Result`.  Errors produced by the
repository or the resolver are passed through unchanged; the service
adds only ``NotFound`` for deletes that removed nothing.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from creature_catalog.app.core.errors import NotFound, Result
from creature_catalog.app.schemas.creature import Creature, CreatureCreate, CreatureUpdate, DeleteAck
from creature_catalog.app.services.creature_repository import CreatureRepository
from creature_catalog.app.services.pagination import PaginationPolicy
from creature_catalog.app.services.term_resolver import TermResolver

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    return name.lower()


class CreatureService:
    """Create, look up, list, modify and remove creatures.

    Parameters
    ----------
    repository : CreatureRepository
        Gateway to the ``creatures`` collection.
    default_limit : int
        Page size used by :meth:`list` when the caller does not pass
        one.  Read once here; later configuration changes do not
        affect a running service.
    """

    def __init__(self, repository: CreatureRepository, default_limit: int) -> None:
        self.repository = repository
        self.pagination = PaginationPolicy(default_limit)
        self.resolver = TermResolver(repository)

    async def create(self, data: CreatureCreate) -> Result[Creature]:
        """Insert a new creature and return it with its storage id."""
        result = await self.repository.insert(normalize_name(data.name), data.no)
        if result.ok:
            logger.info("Created creature %s (no=%s, id=%s)", result.value.name, result.value.no, result.value.id)
        return result

    async def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> Result[Iterator[Creature]]:
        """Return one page of creatures ordered by ``no`` ascending.

        The page is read without a snapshot; concurrent writes may or
        may not be visible.
        """
        page = self.pagination.page(limit=limit, offset=offset)
        return await self.repository.find_page(page)

    async def resolve(self, term: str) -> Result[Creature]:
        """Find a creature by ordinal, storage id or name (in that order)."""
        return await self.resolver.resolve(term)

    async def update(self, term: str, data: CreatureUpdate) -> Result[Creature]:
        """Apply a partial update to the creature identified by ``term``.

        The returned creature is the previously loaded record overlaid
        with the supplied fields.  It is not re-read from the store, so
        anything the store changes on its own during the update is not
        reflected.
        """
        found = await self.resolver.resolve(term)
        if not found.ok:
            return found
        creature = found.value

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = normalize_name(changes["name"])
        if not changes:
            return Result.success(creature)

        written = await self.repository.update_by_id(creature.id, changes)
        if not written.ok:
            return Result.failure(written.error)
        logger.info("Updated creature %s with %s", creature.id, changes)
        return Result.success(creature.model_copy(update=changes))

    async def delete(self, storage_id: str) -> Result[DeleteAck]:
        """Remove the creature with ``storage_id``."""
        deleted = await self.repository.delete_by_id(storage_id)
        if not deleted.ok:
            return Result.failure(deleted.error)
        if deleted.value == 0:
            return Result.failure(NotFound(term=storage_id, label="id"))
        logger.info("Deleted creature %s", storage_id)
        return Result.success(DeleteAck(message="Creature deleted"))
