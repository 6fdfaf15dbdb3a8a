"""
Wallpalette Schemas
Pydantic models for persisted cache records.
"""
from typing import Annotated, List

from pydantic import BaseModel, Field, StringConstraints

ANSI_PALETTE_SIZE = 16
HEX_COLOR_PATTERN = r"^#[0-9A-F]{6}$"

HexColor = Annotated[str, StringConstraints(pattern=HEX_COLOR_PATTERN)]


class CacheRecord(BaseModel):
    """One persisted palette, stored as ``<key>.json`` in the cache directory."""
    palette: List[HexColor] = Field(
        ...,
        min_length=ANSI_PALETTE_SIZE,
        max_length=ANSI_PALETTE_SIZE,
        description="16 ANSI colors as uppercase #RRGGBB strings"
    )
    timestamp: int = Field(
        ...,
        ge=0,
        description="Creation time in milliseconds since the epoch"
    )
    version: int = Field(
        ...,
        ge=1,
        description="Cache record format version"
    )
