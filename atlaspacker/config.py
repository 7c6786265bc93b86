"""
Packing configuration.

PackConfig holds the canvas bounds and layout switches consumed by every
packing strategy. Values are validated on construction, so a packer never
runs with a negative padding or a zero-sized canvas.
"""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict

DEFAULT_MAX_SIZE = 4096
DEFAULT_PADDING = 1


class PackMethod(str, Enum):
    """Packing algorithm selector. Only SHELF is implemented."""
    SHELF = "shelf"
    MAXRECTS = "maxrects"
    GUILLOTINE = "guillotine"

    @property
    def label(self) -> str:
        return {
            PackMethod.SHELF: "Shelf",
            PackMethod.MAXRECTS: "MaxRects",
            PackMethod.GUILLOTINE: "Guillotine",
        }[self]


class PackConfig(BaseModel):
    model_config = ConfigDict(extra='forbid', frozen=True)

    max_width: int = Field(DEFAULT_MAX_SIZE, gt=0, description="Maximum atlas width in pixels.")
    max_height: int = Field(DEFAULT_MAX_SIZE, gt=0, description="Maximum atlas height in pixels.")
    padding: int = Field(DEFAULT_PADDING, ge=0, description="Trailing space added after each image, in pixels.")
    method: PackMethod = Field(PackMethod.SHELF, description="Packing algorithm to use.")
    power_of_two: bool = Field(True, description="Round output dimensions up to powers of two.")
    allow_rotation: bool = Field(False, description="Allow 90 degree rotation. Accepted but not used by any strategy yet.")

    def updated(self, **changes) -> "PackConfig":
        """Return a validated copy with `changes` applied."""
        data = self.model_dump()
        data.update(changes)
        return PackConfig.model_validate(data)
