"""
Schemas for the bulk importer.

The remote catalog lists entries as ``{"name": ..., "url": ...}``
pairs; the importer derives the ordinal from the URL and, when asked
to submit, reports what happened to each entry.
"""

from typing import List, Optional

from pydantic import BaseModel


class SeedEntry(BaseModel):
    name: str
    url: str
    no: int


class SeedOutcome(BaseModel):
    """Result of feeding one entry through the create path."""

    name: str
    no: int
    created: bool
    id: Optional[str] = None
    error: Optional[str] = None


class SeedReport(BaseModel):
    entries: List[SeedEntry]
    outcomes: List[SeedOutcome] = []
