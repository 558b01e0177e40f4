"""
Creature endpoints for API v1.

These routes expose the catalog CRUD operations.  A creature can be
fetched or updated by any identifying term (ordinal, storage id or
name); deletion requires the storage id.  Request bodies are
validated by the Pydantic schemas before the service is reached.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from creature_catalog.app.api.errors import unwrap
from creature_catalog.app.schemas.creature import Creature, CreatureCreate, CreatureUpdate, DeleteAck
from creature_catalog.app.services.creature_service import CreatureService

router = APIRouter()


def get_creature_service(request: Request) -> CreatureService:
    """Return the service instance built by ``create_app``."""
    return request.app.state.creature_service


@router.post("/", response_model=Creature, status_code=status.HTTP_201_CREATED)
async def create_creature(
    creature_in: CreatureCreate,
    service: CreatureService = Depends(get_creature_service),
) -> Creature:
    """Create a new creature.

    Returns HTTP 400 if the name (in any casing) or the ordinal is
    already taken.
    """
    return unwrap(await service.create(creature_in))


@router.get("/", response_model=List[Creature])
async def list_creatures(
    limit: Optional[int] = Query(None, ge=0),
    offset: Optional[int] = Query(None, ge=0),
    service: CreatureService = Depends(get_creature_service),
) -> List[Creature]:
    """Return a page of creatures ordered by ordinal.

    ``limit`` defaults to the configured page size; ``limit=0``
    returns every creature from ``offset`` on.
    """
    return list(unwrap(await service.list(limit=limit, offset=offset)))


@router.get("/{term}", response_model=Creature)
async def get_creature(term: str, service: CreatureService = Depends(get_creature_service)) -> Creature:
    """Retrieve a creature by ordinal, storage id or name."""
    return unwrap(await service.resolve(term))


@router.patch("/{term}", response_model=Creature)
async def update_creature(
    term: str,
    creature_in: CreatureUpdate,
    service: CreatureService = Depends(get_creature_service),
) -> Creature:
    """Update a creature identified by ``term``.

    The response is the stored creature as it was loaded, overlaid
    with the submitted fields.
    """
    return unwrap(await service.update(term, creature_in))


@router.delete("/{creature_id}", response_model=DeleteAck)
async def delete_creature(creature_id: str, service: CreatureService = Depends(get_creature_service)) -> DeleteAck:
    """Delete a creature by storage id.  Returns HTTP 404 if nothing was removed."""
    return unwrap(await service.delete(creature_id))
