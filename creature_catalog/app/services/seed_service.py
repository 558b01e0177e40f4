"""
Bulk importer for the creature catalog.

Fetches one page of ``{"name", "url"}`` pairs from a remote catalog
(the public PokeAPI by default), derives each entry's ordinal from the
URL and optionally feeds the entries back through the create path,
either in-process via :class:`CreatureService` or over HTTP against a
running instance of this API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from creature_catalog.app.schemas.creature import CreatureCreate
from creature_catalog.app.schemas.seed import SeedEntry, SeedOutcome, SeedReport
from creature_catalog.app.services.creature_service import CreatureService

logger = logging.getLogger(__name__)


class SeedError(Exception):
    """The remote catalog could not be fetched or understood."""


def ordinal_from_url(url: str) -> int:
    """Extract the ordinal from a catalog URL.

    ``https://pokeapi.co/api/v2/pokemon/25/`` -> ``25``; the ordinal is
    the second-to-last ``/``-separated segment.
    """
    segments = url.split("/")
    if len(segments) < 2:
        raise SeedError(f"Cannot derive ordinal from url {url!r}")
    try:
        return int(segments[-2])
    except ValueError as exc:
        raise SeedError(f"Cannot derive ordinal from url {url!r}") from exc


class SeedService:
    """Import a page of creatures from a remote catalog."""

    def __init__(self, source_url: str, limit: int = 10, client: Optional[httpx.AsyncClient] = None) -> None:
        self.source_url = source_url
        self.limit = limit
        self._client = client

    async def fetch_entries(self) -> List[SeedEntry]:
        """Download one page from the remote catalog."""
        payload = await self._get_json(self.source_url, params={"limit": self.limit})
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise SeedError("Remote catalog response has no 'results' list")
        entries = []
        for item in results:
            if not isinstance(item, dict):
                raise SeedError(f"Malformed catalog entry {item!r}")
            name, url = item.get("name"), item.get("url")
            if not name or not url:
                raise SeedError(f"Malformed catalog entry {item!r}")
            entries.append(SeedEntry(name=name, url=url, no=ordinal_from_url(url)))
        logger.info("Fetched %d catalog entries from %s", len(entries), self.source_url)
        return entries

    async def execute(self, service: Optional[CreatureService] = None) -> SeedReport:
        """Fetch entries and, if ``service`` is given, create each one.

        Entries that fail to create (duplicates, store errors) are
        reported per entry; the import carries on with the rest.
        """
        entries = await self.fetch_entries()
        report = SeedReport(entries=entries)
        if service is None:
            return report
        for entry in entries:
            try:
                data = CreatureCreate(name=entry.name, no=entry.no)
            except ValidationError as exc:
                report.outcomes.append(
                    SeedOutcome(name=entry.name, no=entry.no, created=False, error=str(exc.errors()[0]["msg"]))
                )
                continue
            result = await service.create(data)
            if result.ok:
                report.outcomes.append(SeedOutcome(name=entry.name, no=entry.no, created=True, id=result.value.id))
            else:
                logger.warning("Skipped %s (no=%s): %s", entry.name, entry.no, result.error.message)
                report.outcomes.append(
                    SeedOutcome(name=entry.name, no=entry.no, created=False, error=result.error.message)
                )
        return report

    async def submit_to_api(self, base_url: str, entries: Optional[List[SeedEntry]] = None) -> List[SeedOutcome]:
        """POST each entry to ``{base_url}/creatures/`` of a running instance."""
        if entries is None:
            entries = await self.fetch_entries()
        target = base_url.rstrip("/") + "/creatures/"
        outcomes = []
        async with self._session() as client:
            for entry in entries:
                try:
                    response = await client.post(target, json={"name": entry.name, "no": entry.no})
                except httpx.HTTPError as exc:
                    raise SeedError(f"Could not reach {target}: {exc}") from exc
                if response.status_code == httpx.codes.CREATED:
                    body = response.json()
                    outcomes.append(SeedOutcome(name=entry.name, no=entry.no, created=True, id=body.get("id")))
                else:
                    detail = _error_detail(response)
                    logger.warning("Skipped %s (no=%s): %s", entry.name, entry.no, detail)
                    outcomes.append(SeedOutcome(name=entry.name, no=entry.no, created=False, error=detail))
        return outcomes

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        async with self._session() as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPError as exc:
                raise SeedError(f"Could not fetch {url}: {exc}") from exc
            except ValueError as exc:
                raise SeedError(f"Invalid JSON from {url}") from exc

    def _session(self) -> "_ClientSession":
        return _ClientSession(self._client)


class _ClientSession:
    """Use an injected client as-is, or open and close a private one."""

    def __init__(self, client: Optional[httpx.AsyncClient]) -> None:
        self._client = client
        self._owned: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        self._owned = httpx.AsyncClient(timeout=30)
        return self._owned

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._owned is not None:
            await self._owned.aclose()
            self._owned = None


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return f"HTTP {response.status_code}"
