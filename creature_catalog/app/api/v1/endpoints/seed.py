"""
Seed endpoint for API v1.

Pulls one page of creatures from the configured remote catalog.  With
``submit=true`` every entry is also created in this catalog; entries
that already exist are reported as not created rather than failing the
whole request.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from creature_catalog.app.api.v1.endpoints.creatures import get_creature_service
from creature_catalog.app.schemas.seed import SeedReport
from creature_catalog.app.services.creature_service import CreatureService
from creature_catalog.app.services.seed_service import SeedError, SeedService

router = APIRouter()


def get_seed_service(request: Request) -> SeedService:
    return request.app.state.seed_service


@router.get("/", response_model=SeedReport)
async def run_seed(
    submit: bool = Query(False),
    seeder: SeedService = Depends(get_seed_service),
    service: CreatureService = Depends(get_creature_service),
) -> SeedReport:
    """Fetch the remote page and optionally import it."""
    try:
        return await seeder.execute(service if submit else None)
    except SeedError as exc:
        logging.getLogger(__name__).warning("Seed failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
