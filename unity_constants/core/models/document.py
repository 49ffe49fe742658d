"""
Document model — the in-memory shape of a generated constants file.

Category builders produce ``CategoryBlock`` instances; a generator
renders the assembled ``ConstantsDocument`` once. Gathering data and
laying out text never touch each other.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

GENERATED_HEADER = "This file is auto-generated. Modifications are not saved."


class Constant(BaseModel):
    """One constant declaration.

    Attributes:
        identifier: Code-safe name (already sanitized and deduplicated).
        value:      The constant's value.
        kind:       ``"string"`` or ``"int"``.
        summary:    Doc-comment text, carrying the original display name.
        expression: Literal to emit instead of ``value`` (e.g. ``1 << 5``).
    """

    identifier: str
    value: str | int
    kind: Literal["string", "int"]
    summary: str = ""
    expression: str | None = None


class CategoryBlock(BaseModel):
    """A named container of constants (one per metadata category).

    ``groups`` holds one or more ordered runs of constants; the renderer
    separates consecutive non-empty groups with a blank line. Most
    categories have a single group; layers have indices then masks.
    """

    category: str
    name: str
    groups: list[list[Constant]] = Field(default_factory=lambda: [[]])

    @property
    def constants(self) -> list[Constant]:
        """All constants in declaration order."""
        return [c for group in self.groups for c in group]

    @property
    def identifiers(self) -> list[str]:
        return [c.identifier for c in self.constants]

    def get(self, identifier: str) -> Constant | None:
        """Look up a constant by identifier."""
        for const in self.constants:
            if const.identifier == identifier:
                return const
        return None

    def __len__(self) -> int:
        return sum(len(group) for group in self.groups)


class ConstantsDocument(BaseModel):
    """The whole generated file: header, wrapper namespace, ordered blocks."""

    namespace: str = "UnityConstants"
    header: str = GENERATED_HEADER
    blocks: list[CategoryBlock] = Field(default_factory=list)

    def block(self, category: str) -> CategoryBlock | None:
        """Look up a block by category key (``"tags"``, ``"layers"``, ...)."""
        for blk in self.blocks:
            if blk.category == category:
                return blk
        return None

    def counts(self) -> dict[str, int]:
        """Constant count per category, in document order."""
        return {blk.category: len(blk) for blk in self.blocks}
