"""
Texture atlas definitions.

A TextureAtlas is a named canvas size plus a set of named pixel rectangles
(AtlasRegion). Regions carry normalized UVs computed against the atlas size.
No pixel data is held here; `texture_path` only records where the matching
image lives.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from pydantic import ValidationError

from .exceptions import AtlasFileError
from .schema import AtlasDocument, RegionDefinition

logger = logging.getLogger(__name__)


@dataclass
class AtlasRegion:
    """A named rectangle within an atlas."""
    name: str
    x: int
    y: int
    width: int
    height: int
    rotated: bool = False
    u1: float = 0.0
    v1: float = 0.0
    u2: float = 0.0
    v2: float = 0.0

    @property
    def rect(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height

    @property
    def uv(self) -> List[float]:
        return [self.u1, self.v1, self.u2, self.v2]

    def calculate_uv(self, texture_width: int, texture_height: int) -> None:
        """Normalize the pixel rect against a texture of the given size."""
        if texture_width <= 0 or texture_height <= 0:
            raise ValueError(f"Texture size must be positive, got {texture_width}x{texture_height}")
        self.u1 = self.x / texture_width
        self.v1 = self.y / texture_height
        self.u2 = (self.x + self.width) / texture_width
        self.v2 = (self.y + self.height) / texture_height


class TextureAtlas:
    """
    Named collection of regions on a fixed-size canvas.

    Example:
        >>> atlas = TextureAtlas("ui")
        >>> atlas.set_size(256, 128)
        >>> region = atlas.add_region_rect("button", 64, 32, 32, 16)
        >>> region.uv
        [0.25, 0.25, 0.375, 0.375]
    """

    def __init__(self, name: str, width: int = 0, height: int = 0, texture_path: Optional[str] = None):
        self.name = name
        self.width = width
        self.height = height
        self.texture_path = texture_path
        self._regions: Dict[str, AtlasRegion] = {}

    def __repr__(self) -> str:
        return f"TextureAtlas(name={self.name!r}, size={self.width}x{self.height}, regions={len(self._regions)})"

    def __len__(self) -> int:
        return len(self._regions)

    def __contains__(self, name: str) -> bool:
        return name in self._regions

    def __iter__(self) -> Iterator[AtlasRegion]:
        return iter(self._regions.values())

    def set_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    @property
    def region_count(self) -> int:
        return len(self._regions)

    @property
    def region_names(self) -> List[str]:
        return list(self._regions)

    def add_region(self, region: AtlasRegion) -> None:
        """Add a region, replacing any existing region with the same name."""
        self._regions[region.name] = region

    def add_region_rect(self, name: str, x: int, y: int, width: int, height: int) -> AtlasRegion:
        """Create and add a region by rectangle. UVs are filled in if the atlas has a size."""
        region = AtlasRegion(name=name, x=x, y=y, width=width, height=height)
        if self.width > 0 and self.height > 0:
            region.calculate_uv(self.width, self.height)
        self.add_region(region)
        return region

    def remove_region(self, name: str) -> bool:
        return self._regions.pop(name, None) is not None

    def get_region(self, name: str) -> Optional[AtlasRegion]:
        return self._regions.get(name)

    def has_region(self, name: str) -> bool:
        return name in self._regions

    def clear_regions(self) -> None:
        self._regions.clear()

    def recalculate_uvs(self) -> None:
        """Recompute UVs of every region for the current atlas size."""
        for region in self._regions.values():
            region.calculate_uv(self.width, self.height)

    def to_document(self) -> AtlasDocument:
        return AtlasDocument(
            name=self.name,
            texture_path=self.texture_path,
            width=self.width,
            height=self.height,
            regions=[
                RegionDefinition(
                    name=r.name, x=r.x, y=r.y, width=r.width, height=r.height,
                    rotated=r.rotated, uv=r.uv
                )
                for r in self._regions.values()
            ]
        )

    @classmethod
    def from_document(cls, doc: AtlasDocument) -> "TextureAtlas":
        atlas = cls(doc.name, doc.width, doc.height, doc.texture_path)
        for definition in doc.regions:
            region = atlas.add_region_rect(
                definition.name, definition.x, definition.y, definition.width, definition.height
            )
            region.rotated = definition.rotated
        return atlas

    def save(self, path: Union[str, Path]) -> None:
        """Write the atlas definition as JSON."""
        data = self.to_document().model_dump(exclude_none=True)
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)
        logger.info(f"Saved atlas '{self.name}' ({self.width}x{self.height}, {len(self)} regions) to {path}")

    @classmethod
    def load(cls, path: Union[str, Path]) -> "TextureAtlas":
        """
        Read an atlas definition written by save().

        Raises:
            AtlasFileError: File is not valid JSON or does not match the schema
        """
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise AtlasFileError(f"Invalid JSON in atlas file {path}: {e}") from e

        try:
            doc = AtlasDocument.model_validate(data)
        except ValidationError as e:
            raise AtlasFileError(f"Invalid atlas definition in {path}: {e}") from e

        return cls.from_document(doc)
