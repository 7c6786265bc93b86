"""Custom exceptions for atlas packing operations"""


class PackError(Exception):
    """Base exception for packing errors"""
    pass


class NoImagesError(PackError):
    """pack() was called with an empty registry"""

    def __init__(self, message: str = "No images to pack"):
        super().__init__(message)


class NoSpaceError(PackError):
    """An image could not be placed within the maximum atlas height"""

    def __init__(self, name: str, width: int, height: int):
        self.name = name
        self.width = width
        self.height = height
        super().__init__(f"Image '{name}' ({width}x{height}) does not fit in atlas")


class NotPackedError(PackError):
    """A packed result was requested before a successful pack()"""
    pass


class AtlasFileError(Exception):
    """Atlas definition file could not be read or validated"""
    pass
