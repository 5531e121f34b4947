"""
OpenCV helpers for moving map images in and out of the intensity-field engine.

The engine works on RGBA ``uint8`` arrays of shape ``(height, width, 4)``.
This module handles the edges:
- Image I/O with validation (decode to RGBA, encode from RGBA)
- Channel-order conversion between OpenCV BGR(A)/grayscale and RGBA

I/O functions follow the Result | ProcessingError pattern for error handling.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeAlias

import cv2
import numpy as np
from numpy.typing import NDArray

from htmap.models import InputError, ProcessingError, ProcessingStage

# =============================================================================
# TYPE ALIASES
# =============================================================================

Image: TypeAlias = NDArray[Any]  # OpenCV image, BGR/BGRA or grayscale
RGBAImage: TypeAlias = NDArray[np.uint8]  # (height, width, 4) RGBA


# =============================================================================
# RESULT DATACLASSES
# =============================================================================


@dataclass(frozen=True)
class ImageInfo:
    """Information about a loaded image."""

    height: int
    width: int
    channels: int
    has_alpha: bool
    megapixels: float


# =============================================================================
# SECTION 1: CHANNEL CONVERSION
# =============================================================================


def _to_uint8(image: Image) -> Image:
    if image.dtype == np.uint8:
        return image
    if image.dtype == np.uint16:
        return (image // 257).astype(np.uint8)
    return cv2.normalize(image, None, alpha=0, beta=255, norm_type=cv2.NORM_MINMAX).astype(
        np.uint8
    )


def to_rgba(image: Image) -> RGBAImage:
    """
    Convert an OpenCV-decoded image to RGBA.

    Handles grayscale (2-D or single channel), BGR, and BGRA inputs; 16-bit
    images are scaled down to 8 bits.
    """
    img = _to_uint8(image)
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if img.ndim != 3:
        raise InputError(f"Unsupported image array with {img.ndim} dimensions")

    channels = img.shape[2]
    if channels == 1:
        return cv2.cvtColor(img[:, :, 0], cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    raise InputError(f"Unsupported channel count: {channels}")


def to_bgra(rgba: RGBAImage) -> Image:
    return cv2.cvtColor(np.ascontiguousarray(rgba), cv2.COLOR_RGBA2BGRA)


def get_image_info(image: Image) -> ImageInfo:
    """
    Extract metadata about an image.

    Args:
        image: RGBA, BGR(A) or grayscale image

    Returns:
        ImageInfo with dimensions and channel info
    """
    if image.ndim == 2:
        height, width = image.shape
        channels = 1
    else:
        height, width, channels = image.shape

    return ImageInfo(
        height=height,
        width=width,
        channels=channels,
        has_alpha=channels == 4,
        megapixels=(height * width) / 1_000_000,
    )


# =============================================================================
# SECTION 2: IMAGE I/O
# =============================================================================


def load_image(
    path: str | Path,
    stage: ProcessingStage = ProcessingStage.LOAD,
) -> RGBAImage | ProcessingError:
    """
    Load an image from disk as RGBA.

    Handles:
    - Corrupted images (cv2.imread failure)
    - Zero-sized images
    - File not found / permission errors

    Args:
        path: Path to image file
        stage: Processing stage for error reporting

    Returns:
        RGBA image array or ProcessingError
    """
    path = Path(path)

    if not path.exists():
        return ProcessingError(
            stage=stage,
            error_type="file_not_found",
            recoverable=False,
            message=f"Image file not found: {path}",
            details={"path": str(path)},
        )

    try:
        # Keep the alpha channel so transparency survives the round trip
        img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)

        if img is None or img.size == 0:
            return ProcessingError(
                stage=stage,
                error_type="imread_failed",
                recoverable=False,
                message=f"Failed to read image (may be corrupted): {path}",
                details={"path": str(path)},
            )

        return to_rgba(img)

    except PermissionError:
        return ProcessingError(
            stage=stage,
            error_type="permission_denied",
            recoverable=False,
            message=f"Permission denied reading: {path}",
            details={"path": str(path)},
        )
    except InputError as e:
        return ProcessingError(
            stage=stage,
            error_type="unsupported_format",
            recoverable=False,
            message=str(e),
            details={"path": str(path)},
        )
    except Exception as e:
        return ProcessingError(
            stage=stage,
            error_type="io_error",
            recoverable=False,
            message=f"Error reading image: {e}",
            details={"path": str(path), "error": str(e)},
        )


def save_image(
    rgba: RGBAImage,
    path: str | Path,
    stage: ProcessingStage = ProcessingStage.SAVE,
) -> Path | ProcessingError:
    """
    Save an RGBA image to disk.

    Args:
        rgba: RGBA image to save
        path: Output path (format chosen by extension)
        stage: Processing stage for error reporting

    Returns:
        Path to saved file or ProcessingError
    """
    path = Path(path)

    try:
        # Create parent directories if needed
        path.parent.mkdir(parents=True, exist_ok=True)

        success = cv2.imwrite(str(path), to_bgra(rgba))
        if not success:
            return ProcessingError(
                stage=stage,
                error_type="imwrite_failed",
                recoverable=False,
                message=f"Failed to write image: {path}",
                details={"path": str(path)},
            )
        return path

    except PermissionError:
        return ProcessingError(
            stage=stage,
            error_type="permission_denied",
            recoverable=False,
            message=f"Permission denied writing: {path}",
            details={"path": str(path)},
        )
    except Exception as e:
        return ProcessingError(
            stage=stage,
            error_type="io_error",
            recoverable=False,
            message=f"Error writing image: {e}",
            details={"path": str(path), "error": str(e)},
        )
