"""
Image service for profile photos and verification documents.
Resizes, re-encodes and validates images in memory with Pillow.
"""

import io
import logging
from typing import List, Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError, features

from rental_trust.config import get_settings
from rental_trust.schemas.image import (
    ResizeOptions,
    ImageProcessResult,
    ImageMetadata,
    ImageValidationResult
)
from rental_trust.utils.exceptions import (
    InvalidImageError,
    UnsupportedFileTypeError,
    FileSizeExceededError
)

logger = logging.getLogger(__name__)

# Pillow encoder names for each output format
PIL_FORMATS = {
    "jpeg": "JPEG",
    "png": "PNG",
    "webp": "WEBP",
    "avif": "AVIF",
}

# Image.open refuses headers claiming more than twice Image.MAX_IMAGE_PIXELS
UNREADABLE_IMAGE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    ValueError
)

PIXEL_LIMIT_MESSAGE = "Image dimensions exceed the pixel limit"

PROFILE_IMAGE_OPTIONS = ResizeOptions(width=400, height=400, fit="cover", format="webp", quality=80)
THUMBNAIL_OPTIONS = ResizeOptions(width=200, height=200, fit="cover", format="webp", quality=70)
DOCUMENT_IMAGE_OPTIONS = ResizeOptions(width=1920, fit="inside", format="jpeg", quality=85)


def _target_size(image: Image.Image, width: Optional[int], height: Optional[int]) -> Tuple[int, int]:
    """Fill in a missing dimension from the image's aspect ratio."""
    if width and height:
        return width, height
    if width:
        return width, max(1, round(image.height * width / image.width))
    return max(1, round(image.width * height / image.height)), height


def _resize(image: Image.Image, options: ResizeOptions) -> Image.Image:
    if not options.width and not options.height:
        return image

    size = _target_size(image, options.width, options.height)

    if options.fit == "cover":
        return ImageOps.fit(image, size, method=Image.LANCZOS)
    if options.fit == "contain":
        return ImageOps.pad(image, size, method=Image.LANCZOS)
    if options.fit == "fill":
        return image.resize(size, Image.LANCZOS)
    if options.fit == "outside":
        # smallest aspect-preserving size that covers the whole box
        scale = max(size[0] / image.width, size[1] / image.height)
        return image.resize(
            (max(1, round(image.width * scale)), max(1, round(image.height * scale))),
            Image.LANCZOS
        )

    # inside: keep the aspect ratio and never enlarge
    bounded = image.copy()
    bounded.thumbnail(
        (options.width or image.width, options.height or image.height),
        Image.LANCZOS
    )
    return bounded


def _has_alpha(image: Image.Image) -> bool:
    return "A" in image.getbands() or "transparency" in image.info


def _encode(image: Image.Image, options: ResizeOptions) -> bytes:
    output = io.BytesIO()

    if options.format == "jpeg":
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        image.save(output, PIL_FORMATS["jpeg"], quality=options.quality, optimize=True)
    elif options.format == "png":
        image.save(output, PIL_FORMATS["png"], optimize=True, compress_level=9)
    else:
        if options.format == "avif" and not features.check("avif"):
            raise ValueError("AVIF encoding is not available in this Pillow build")
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA" if _has_alpha(image) else "RGB")
        image.save(output, PIL_FORMATS[options.format], quality=options.quality)

    return output.getvalue()


def resize_image(data: bytes, options: Optional[ResizeOptions] = None) -> ImageProcessResult:
    """
    Resize and re-encode an image.

    Args:
        data: Raw image bytes
        options: Target size, fit mode, output format and quality

    Returns:
        ImageProcessResult; on failure success is False and error is set
    """
    options = options or ResizeOptions()

    try:
        with Image.open(io.BytesIO(data)) as source:
            source.load()
            image = ImageOps.exif_transpose(source)
            encoded = _encode(_resize(image, options), options)

        with Image.open(io.BytesIO(encoded)) as result:
            width, height = result.size
            result_format = result.format.lower()

        logger.info(
            f"Image resized: {len(data)} -> {len(encoded)} bytes, "
            f"{width}x{height} {result_format}"
        )

        return ImageProcessResult(
            success=True,
            data=encoded,
            format=result_format,
            width=width,
            height=height,
            size=len(encoded),
        )

    except UNREADABLE_IMAGE_ERRORS as e:
        logger.error(f"Image resize failed: {e}")
        return ImageProcessResult(success=False, error=str(e) or "Image processing failed")


def optimize_profile_image(data: bytes) -> ImageProcessResult:
    """400x400 square crop, WebP at quality 80."""
    return resize_image(data, PROFILE_IMAGE_OPTIONS)


def create_thumbnail(data: bytes) -> ImageProcessResult:
    """200x200 square crop, WebP at quality 70."""
    return resize_image(data, THUMBNAIL_OPTIONS)


def optimize_document_image(data: bytes) -> ImageProcessResult:
    """
    Shrink a document scan to at most 1920px wide, keeping its aspect ratio.
    Documents are stored as JPEG for legibility.
    """
    return resize_image(data, DOCUMENT_IMAGE_OPTIONS)


def _read_metadata(data: bytes) -> ImageMetadata:
    with Image.open(io.BytesIO(data)) as image:
        width, height = image.size
        image_format = image.format.lower() if image.format else None
    return ImageMetadata(width=width, height=height, format=image_format, size=len(data))


def get_image_metadata(data: bytes) -> Optional[ImageMetadata]:
    """Dimensions and format of an image, or None if it cannot be read."""
    try:
        return _read_metadata(data)
    except UNREADABLE_IMAGE_ERRORS:
        return None


def validate_image(
    data: bytes,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
    max_size: Optional[int] = None,
    allowed_formats: Optional[List[str]] = None
) -> ImageValidationResult:
    """
    Check an uploaded image against size, format and dimension limits.

    Limits default to the configured max_image_* settings.

    Returns:
        ImageValidationResult with valid False and the first failing check as error
    """
    settings = get_settings()
    max_width = max_width or settings.max_image_width
    max_height = max_height or settings.max_image_height
    max_size = max_size or settings.max_image_size
    allowed_formats = allowed_formats or settings.allowed_image_formats

    if len(data) > max_size:
        max_mb = round(max_size / (1024 * 1024))
        return ImageValidationResult(valid=False, error=f"File size exceeds {max_mb}MB")

    try:
        metadata = _read_metadata(data)
    except Image.DecompressionBombError:
        return ImageValidationResult(valid=False, error=PIXEL_LIMIT_MESSAGE)
    except UNREADABLE_IMAGE_ERRORS:
        return ImageValidationResult(valid=False, error="Not a valid image file")

    if not metadata.format or metadata.format not in allowed_formats:
        return ImageValidationResult(valid=False, error="Unsupported image format")

    if metadata.width > max_width:
        return ImageValidationResult(valid=False, error=f"Image width exceeds {max_width}px")

    if metadata.height > max_height:
        return ImageValidationResult(valid=False, error=f"Image height exceeds {max_height}px")

    return ImageValidationResult(valid=True)


def require_valid_image(data: bytes) -> ImageMetadata:
    """
    Raising variant of validate_image for upload handlers.

    Returns:
        Metadata of the accepted image

    Raises:
        FileSizeExceededError: If data is larger than max_image_size
        InvalidImageError: If data is not readable or exceeds the dimension limits
        UnsupportedFileTypeError: If the format is not allowed
    """
    settings = get_settings()

    if len(data) > settings.max_image_size:
        raise FileSizeExceededError(len(data), settings.max_image_size)

    try:
        metadata = _read_metadata(data)
    except Image.DecompressionBombError:
        raise InvalidImageError(PIXEL_LIMIT_MESSAGE)
    except UNREADABLE_IMAGE_ERRORS:
        raise InvalidImageError()

    if not metadata.format or metadata.format not in settings.allowed_image_formats:
        raise UnsupportedFileTypeError(metadata.format or "unknown", settings.allowed_image_formats)

    if metadata.width > settings.max_image_width or metadata.height > settings.max_image_height:
        raise InvalidImageError(
            f"Image dimensions {metadata.width}x{metadata.height} exceed "
            f"{settings.max_image_width}x{settings.max_image_height}"
        )

    return metadata
