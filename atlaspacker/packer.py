"""
Build-time atlas packer.

Collects named image sizes, arranges them on a single bounded canvas and
exports the layout as a TextureAtlas. Only dimensions are used; pixel data is
never read.

Example:
    >>> packer = AtlasPacker(PackConfig(max_width=512, max_height=512))
    >>> packer.add_image("hero", 100, 50)
    True
    >>> packer.pack()
    >>> packer.packed_width, packer.packed_height
    (128, 64)
    >>> atlas = packer.create_atlas("sprites")
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, Optional

from .atlas import TextureAtlas
from .config import PackConfig
from .exceptions import NoImagesError, NoSpaceError, NotPackedError
from .strategies import run_strategy

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ImageEntry:
    """
    An image waiting to be packed.

    Attributes:
        name: Unique key, also used as the atlas region name
        width: Original (unpadded) width in pixels
        height: Original (unpadded) height in pixels
        payload: Caller data, never interpreted by the packer
        packed_x, packed_y: Position after a successful pack()
        rotated: Always False; rotation is not implemented
        is_placed: True only after a successful pack()
    """
    name: str
    width: int
    height: int
    payload: Any = field(default=None, repr=False)
    packed_x: int = 0
    packed_y: int = 0
    rotated: bool = False
    is_placed: bool = False

    def reset_placement(self) -> None:
        self.packed_x = 0
        self.packed_y = 0
        self.rotated = False
        self.is_placed = False


@dataclass(frozen=True)
class ImagePosition:
    x: int
    y: int
    rotated: bool


@dataclass(frozen=True)
class PackResult:
    """Snapshot of the last pack() call."""
    canvas_width: int
    canvas_height: int
    is_packed: bool
    efficiency: float


class AtlasPacker:
    """
    Packs named rectangles into one atlas canvas.

    Changing the image set or the configuration invalidates the previous
    result; call pack() again before querying positions or exporting.
    Instances are independent and not thread-safe.
    """

    def __init__(self, config: Optional[PackConfig] = None):
        self._config = config or PackConfig()
        self._images: Dict[str, ImageEntry] = {}
        self._packed_width = 0
        self._packed_height = 0
        self._is_packed = False

    def __repr__(self) -> str:
        return f"AtlasPacker(images={len(self._images)}, method={self._config.method.value}, packed={self._is_packed})"

    def __len__(self) -> int:
        return len(self._images)

    def __contains__(self, name: str) -> bool:
        return name in self._images

    def _invalidate(self) -> None:
        """Drop the last layout: no entry stays placed until pack() succeeds again."""
        self._is_packed = False
        for entry in self._images.values():
            entry.reset_placement()

    # Configuration

    @property
    def config(self) -> PackConfig:
        return self._config

    @config.setter
    def config(self, config: PackConfig) -> None:
        self._config = config
        self._invalidate()

    def configure(self, **changes) -> PackConfig:
        """
        Update configuration fields.

        Example:
            >>> packer.configure(max_width=1024, padding=0)

        Raises:
            pydantic.ValidationError: A value is out of range or unknown
        """
        self.config = self._config.updated(**changes)
        return self._config

    # Registry

    def add_image(self, name: str, width: int, height: int, payload: Any = None) -> bool:
        """
        Add an image to be packed. Only the dimensions are stored.

        Returns:
            False if the name is already registered or the size is not positive
        """
        if width <= 0 or height <= 0:
            logger.warning(f"Image '{name}' has invalid size {width}x{height}, not added")
            return False
        if name in self._images:
            logger.warning(f"Image '{name}' already exists in packer")
            return False

        self._images[name] = ImageEntry(name=name, width=width, height=height, payload=payload)
        self._invalidate()
        return True

    def remove_image(self, name: str) -> bool:
        if self._images.pop(name, None) is None:
            return False
        self._invalidate()
        return True

    def clear_images(self) -> None:
        self._images.clear()
        self._invalidate()
        self._packed_width = 0
        self._packed_height = 0

    def get_image_count(self) -> int:
        return len(self._images)

    def get_image_payload(self, name: str) -> Any:
        entry = self._images.get(name)
        return entry.payload if entry is not None else None

    def get_image(self, name: str) -> Optional[ImageEntry]:
        return self._images.get(name)

    # Packing

    def pack(self, config: Optional[PackConfig] = None) -> None:
        """
        Arrange every registered image on the canvas.

        The call is all-or-nothing: on failure no image is left placed and the
        packed size is 0x0.

        Args:
            config: Replaces the current configuration before packing

        Raises:
            NoImagesError: The registry is empty
            NoSpaceError: An image does not fit within max_height
        """
        if config is not None:
            self.config = config

        if not self._images:
            raise NoImagesError()

        self._invalidate()
        self._packed_width = 0
        self._packed_height = 0

        try:
            layout = run_strategy(list(self._images.values()), self._config)
        except NoSpaceError as e:
            logger.warning(f"Packing failed: {e}")
            raise

        for name, placement in layout.placements.items():
            entry = self._images[name]
            entry.packed_x = placement.x
            entry.packed_y = placement.y
            entry.rotated = placement.rotated
            entry.is_placed = True

        self._packed_width = layout.width
        self._packed_height = layout.height
        self._is_packed = True

        logger.info(f"Packed {len(layout.placements)} images into {self._packed_width}x{self._packed_height} atlas ({self.efficiency:.1%} efficiency)")

    @property
    def is_packed(self) -> bool:
        return self._is_packed

    @property
    def packed_width(self) -> int:
        return self._packed_width

    @property
    def packed_height(self) -> int:
        return self._packed_height

    @property
    def efficiency(self) -> float:
        """Unpadded image area over canvas area, 0.0 if not packed."""
        if not self._is_packed:
            return 0.0
        total_area = self._packed_width * self._packed_height
        if total_area <= 0:
            return 0.0
        used_area = sum(entry.width * entry.height for entry in self.placed_images())
        return used_area / total_area

    @property
    def result(self) -> PackResult:
        return PackResult(
            canvas_width=self._packed_width,
            canvas_height=self._packed_height,
            is_packed=self._is_packed,
            efficiency=self.efficiency,
        )

    def get_image_position(self, name: str) -> Optional[ImagePosition]:
        """Packed position of an image, or None if unknown or not placed."""
        entry = self._images.get(name)
        if not self._is_packed or entry is None or not entry.is_placed:
            return None
        return ImagePosition(entry.packed_x, entry.packed_y, entry.rotated)

    def placed_images(self) -> Iterator[ImageEntry]:
        """Placed images in insertion order."""
        return (entry for entry in self._images.values() if entry.is_placed)

    def foreach_placed_image(self, visitor: Callable[[ImageEntry], Any]) -> None:
        for entry in self.placed_images():
            visitor(entry)

    # Export

    def create_atlas(self, name: str, texture_path: Optional[str] = None) -> Optional[TextureAtlas]:
        """
        Build a TextureAtlas with one region per placed image.

        Returns:
            The atlas, or None (with a warning) if pack() has not succeeded
        """
        if not self._is_packed:
            logger.warning("Cannot create atlas: pack() has not been called")
            return None

        atlas = TextureAtlas(name, texture_path=texture_path)
        atlas.set_size(self._packed_width, self._packed_height)

        for entry in self.placed_images():
            region = atlas.add_region_rect(entry.name, entry.packed_x, entry.packed_y, entry.width, entry.height)
            if entry.rotated:
                region.rotated = True

        return atlas

    def require_atlas(self, name: str, texture_path: Optional[str] = None) -> TextureAtlas:
        """Like create_atlas(), but raises NotPackedError instead of returning None."""
        if not self._is_packed:
            raise NotPackedError("pack() must succeed before an atlas can be created")
        return self.create_atlas(name, texture_path=texture_path)
