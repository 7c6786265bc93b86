"""
atlaspacker - Build-time texture atlas packing

Packs named image rectangles (dimensions only) into a single bounded canvas
and exports the layout as a texture atlas definition.
"""

from atlaspacker.config import PackConfig, PackMethod
from atlaspacker.packer import AtlasPacker, ImageEntry, ImagePosition, PackResult
from atlaspacker.atlas import TextureAtlas, AtlasRegion
from atlaspacker.exceptions import PackError, NoImagesError, NoSpaceError, NotPackedError, AtlasFileError

__version__ = "0.1.0"
__all__ = [
    "AtlasPacker",
    "ImageEntry",
    "ImagePosition",
    "PackResult",
    "PackConfig",
    "PackMethod",
    "TextureAtlas",
    "AtlasRegion",
    "PackError",
    "NoImagesError",
    "NoSpaceError",
    "NotPackedError",
    "AtlasFileError",
]
