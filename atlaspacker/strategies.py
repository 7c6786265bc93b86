"""
Packing strategies.

Each strategy takes the registered images and a PackConfig and returns a
Layout: one Placement per image plus the canvas size. Strategies never touch
the images themselves; the packer commits a layout only once it is complete.

Only the shelf strategy is implemented. MaxRects and Guillotine are reserved
methods that log a warning and run the shelf strategy instead.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

from .config import PackConfig, PackMethod
from .exceptions import NoSpaceError

logger = logging.getLogger(__name__)


def next_power_of_2(n: int) -> int:
    """Return the smallest power of 2 >= n (1 for n <= 1)."""
    power = 1
    while power < n:
        power <<= 1
    return power


class SizedImage(Protocol):
    """Anything with a unique name and an unpadded size, e.g. ImageEntry."""
    name: str
    width: int
    height: int


@dataclass
class Placement:
    """Top-left position of one image in the layout."""
    x: int
    y: int
    rotated: bool = False


@dataclass
class Layout:
    """Complete result of one strategy run."""
    placements: Dict[str, Placement]
    width: int
    height: int


@dataclass
class Shelf:
    y: int
    height: int
    x_used: int = 0


@dataclass
class ShelfPacker:
    """Packs rectangles into first-fit horizontal shelves.

    Shelf height is fixed by the first rectangle placed on it, so callers must
    feed rectangles tallest first.
    """
    max_width: int
    max_height: int
    shelves: List[Shelf] = field(default_factory=list)
    total_width: int = 0
    total_height: int = 0

    def pack(self, width: int, height: int) -> Optional[Tuple[int, int]]:
        """Try to pack a (padded) rect. Returns (x, y) or None if it fails."""
        # Try existing shelves, in creation order
        for shelf in self.shelves:
            if shelf.x_used + width <= self.max_width and height <= shelf.height:
                x, y = shelf.x_used, shelf.y
                shelf.x_used += width
                self.total_width = max(self.total_width, shelf.x_used)
                return x, y

        # New shelf below the last one
        new_y = 0
        if self.shelves:
            last = self.shelves[-1]
            new_y = last.y + last.height

        if new_y + height > self.max_height:
            return None

        self.shelves.append(Shelf(y=new_y, height=height, x_used=width))
        self.total_width = max(self.total_width, width)
        self.total_height = new_y + height
        return 0, new_y


def pack_shelf(images: Iterable[SizedImage], config: PackConfig) -> Layout:
    """
    Shelf packing. Simple but decent results.

    Sorts images by height (tallest first) and packs them left to right into
    horizontal shelves. Padding is trailing: every image occupies
    (width + padding) x (height + padding), so the canvas includes one padding
    strip past the last column and the last shelf.

    Args:
        images: Objects with `name`, `width` and `height` attributes
        config: Canvas bounds, padding and power-of-two switch

    Returns:
        Layout covering every image

    Raises:
        NoSpaceError: The first image (in sorted order) that does not fit even
            in a new shelf. Nothing after it is attempted.
    """
    ordered = sorted(images, key=lambda img: img.height, reverse=True)
    packer = ShelfPacker(config.max_width, config.max_height)
    placements: Dict[str, Placement] = {}

    for image in ordered:
        pos = packer.pack(image.width + config.padding, image.height + config.padding)
        if pos is None:
            raise NoSpaceError(image.name, image.width, image.height)
        placements[image.name] = Placement(x=pos[0], y=pos[1])

    width, height = packer.total_width, packer.total_height
    if config.power_of_two:
        width = next_power_of_2(width)
        height = next_power_of_2(height)

    logger.debug(f"Shelf layout: {len(placements)} images on {len(packer.shelves)} shelves, {width}x{height}")
    return Layout(placements=placements, width=width, height=height)


def run_strategy(images: List[SizedImage], config: PackConfig) -> Layout:
    """Run the strategy selected by `config.method`."""
    method = config.method
    if method == PackMethod.SHELF:
        return pack_shelf(images, config)
    elif method in (PackMethod.MAXRECTS, PackMethod.GUILLOTINE):
        logger.warning(f"{method.label} algorithm not yet implemented, using Shelf")
        return pack_shelf(images, config)
    raise ValueError(f"Unsupported pack method: {method}")
