"""Utility modules for htmap."""

from htmap.utils.cv_utils import (
    # Type aliases
    Image,
    RGBAImage,
    # Dataclasses
    ImageInfo,
    get_image_info,
    # Image I/O
    load_image,
    save_image,
    # Channel conversion
    to_bgra,
    to_rgba,
)

__all__ = [
    # Type aliases
    "Image",
    "RGBAImage",
    # Dataclasses
    "ImageInfo",
    # Image I/O
    "load_image",
    "save_image",
    "get_image_info",
    # Channel conversion
    "to_rgba",
    "to_bgra",
]
