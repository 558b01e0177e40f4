"""
Pytest configuration for the Creature Catalog API.

Provides fixtures for:
- A fresh SQLite store per test (under ``tmp_path``)
- Repository and service instances bound to that store
- A FastAPI ``TestClient`` wired to the same store
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

import pytest
from fastapi.testclient import TestClient

from creature_catalog.app.core.config import Settings
from creature_catalog.app.core.db import init_db
from creature_catalog.app.main import create_app
from creature_catalog.app.schemas.creature import Creature, CreatureCreate
from creature_catalog.app.services.creature_repository import CreatureRepository
from creature_catalog.app.services.creature_service import CreatureService

DEFAULT_LIMIT = 5


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """Absolute path of an initialised, empty store."""
    url = str(tmp_path / "catalog.db")
    init_db(url)
    return url


@pytest.fixture
def repository(database_url: str) -> CreatureRepository:
    return CreatureRepository(database_url)


@pytest.fixture
def service(repository: CreatureRepository) -> CreatureService:
    return CreatureService(repository, default_limit=DEFAULT_LIMIT)


@pytest.fixture
def test_settings(database_url: str) -> Settings:
    return Settings(
        database_url=database_url,
        default_limit=DEFAULT_LIMIT,
        log_level="DEBUG",
        seed_source_url="https://catalog.test/api/v2/pokemon",
        seed_limit=3,
    )


@pytest.fixture
def client(test_settings: Settings) -> Iterator[TestClient]:
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


async def populate(service: CreatureService, pairs: Iterable[Tuple[str, int]]) -> List[Creature]:
    """Create each ``(name, no)`` pair and return the stored creatures."""
    created = []
    for name, no in pairs:
        result = await service.create(CreatureCreate(name=name, no=no))
        assert result.ok, result.error
        created.append(result.value)
    return created
