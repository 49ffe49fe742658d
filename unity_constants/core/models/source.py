"""
Source entry models — raw records returned by a ProjectSource.

These are ephemeral: produced by querying the host and consumed
immediately by the category builders.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, Field, field_validator

LAYER_SLOT_COUNT = 32

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


def to_int32(value: int) -> int:
    """Reinterpret an unsigned 32-bit value as the signed int C# sees.

    Unity serializes sorting layer ids as ``uint`` while ``SortingLayer.id``
    is an ``int``, so 3926117009 becomes -368850287. Values already in the
    signed range pass through unchanged.

    Raises:
        ValueError: If ``value`` doesn't fit in 32 bits either way.
    """
    if INT32_MAX < value <= 0xFFFFFFFF:
        return value - (1 << 32)
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(f"{value} does not fit in 32 bits")
    return value


class SortingLayerEntry(BaseModel):
    """A sorting layer: display name plus the host's unique id (signed 32-bit)."""

    name: str
    id: int

    @field_validator("id")
    @classmethod
    def _signed_id(cls, v: int) -> int:
        return to_int32(v)


class LayerSlot(BaseModel):
    """One of the 32 fixed layer slots. Empty ``name`` means unused."""

    index: int = Field(ge=0, lt=LAYER_SLOT_COUNT)
    name: str = ""


class SceneEntry(BaseModel):
    """A scene in the build list, in configured order."""

    path: str
    enabled: bool = True

    @property
    def name(self) -> str:
        """Scene file base name with the extension stripped."""
        return PurePosixPath(self.path.replace("\\", "/")).stem
