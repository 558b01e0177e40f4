"""
Pydantic schemas for creature records.

A creature is identified three ways: by its ordinal ``no``, by the
storage identifier ``id`` assigned on insert, or by its ``name``.
Names are stored lower-case; the schemas accept any casing and leave
normalisation to the service layer.
"""

from typing import Optional

from pydantic import BaseModel, Field

# Ordinals are stored as signed 64-bit integers.
MAX_ORDINAL = 2**63 - 1


class CreatureCreate(BaseModel):
    """Schema for creating a new creature."""

    name: str = Field(..., min_length=3, description="Creature name, stored lower-case")
    no: int = Field(..., gt=0, le=MAX_ORDINAL, description="Catalog ordinal, unique across all creatures")


class CreatureUpdate(BaseModel):
    """Schema for updating an existing creature.

    All fields are optional; only provided values will be updated.
    """

    name: Optional[str] = Field(None, min_length=3)
    no: Optional[int] = Field(None, gt=0, le=MAX_ORDINAL)


class Creature(BaseModel):
    """Schema for reading a creature."""

    id: str = Field(..., description="Storage identifier assigned on insert")
    name: str
    no: int


class DeleteAck(BaseModel):
    message: str
