"""Domain errors. Routes translate these into HTTP responses."""

from typing import Optional


class PicPersonaError(Exception):
    """Base class for every error raised by the analysis pipeline."""


class UnsupportedImageTypeError(PicPersonaError):
    """Declared content type, or the decoder that recognizes the bytes, is not allowed."""

    def __init__(self, content_type: Optional[str]):
        self.content_type = content_type
        super().__init__(f"Unsupported image type: {content_type!r}")


class ImageDecodeError(PicPersonaError):
    """The uploaded bytes could not be decoded into a raster."""

    def __init__(self, reason: str = "cannot read image"):
        super().__init__(reason)


class ImageTooLargeError(PicPersonaError):
    """Encoded size or decoded pixel count is over the configured cap.

    ``size`` is None when the decoder refused the image before reporting
    its dimensions.
    """

    def __init__(self, size: Optional[int], limit: int, unit: str):
        self.size = size
        self.limit = limit
        self.unit = unit
        if size is None:
            super().__init__(f"Input too large: over the {unit} limit ({limit})")
        else:
            super().__init__(f"Input too large: {size} {unit} (limit {limit})")


class UnknownCategoryError(PicPersonaError):
    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown category: {category!r}")


class PersistenceError(PicPersonaError):
    """The analytics store rejected a read or write."""
