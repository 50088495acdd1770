import io
from dataclasses import dataclass
from typing import Optional

from PIL import Image, UnidentifiedImageError

from services.printing.errors import ImageDecodeFailure, InvalidImageDimensions


@dataclass(frozen=True)
class FittedImage:
    width: float
    height: float
    x_offset: float


def fit_image(
    natural_width: float,
    natural_height: float,
    max_width: float,
    max_height: float,
    content_width: Optional[float] = None,
) -> FittedImage:
    """
    Scale an image into a max_width x max_height box, preserving aspect ratio.

    Starts at full width; if that makes the image too tall, the height is
    clamped and the width recomputed. x_offset centers the result within
    content_width (defaults to max_width).

    Raises:
        InvalidImageDimensions: if either natural dimension is <= 0
    """
    if natural_width <= 0 or natural_height <= 0:
        raise InvalidImageDimensions(natural_width, natural_height)

    aspect = natural_width / natural_height
    width = max_width
    height = width / aspect

    if height > max_height:
        height = max_height
        width = height * aspect

    if content_width is None:
        content_width = max_width

    return FittedImage(width=width, height=height, x_offset=(content_width - width) / 2)


def decode_image(image_data: bytes) -> Image.Image:
    """
    Decode raw bytes into a fully loaded PIL image.

    Args:
        image_data: Raw bytes from the capture collaborator (JPEG, PNG, HEIF
            via a Pillow plugin, ...)

    Returns:
        Image.Image: RGB or RGBA image ready for drawing

    Raises:
        ImageDecodeFailure: bytes are empty or not a readable raster image
    """
    if not image_data:
        raise ImageDecodeFailure("Image data is empty")

    try:
        img = Image.open(io.BytesIO(image_data))
        img.load()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeFailure(f"Could not decode image: {e}") from e

    # Palette / CMYK / 16-bit modes are normalized so every photo embeds the same way
    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA" if "A" in img.getbands() or "transparency" in img.info else "RGB")

    return img
