"""
PDF Preview Generator.

Rasterizes the first page of a flyer PDF to PNG for preview surfaces, and
reports page sizes for export checks.
"""
import io
from typing import List, Optional, Tuple

import fitz  # PyMuPDF
from PIL import Image

import config

MAX_PREVIEW_DIMENSION = 1800  # Max width or height in pixels


def _calculate_scaled_dimensions(
    width: int, height: int, max_dimension: int
) -> Tuple[int, int]:
    """
    Calculate new dimensions preserving aspect ratio, capped at max_dimension.
    """
    if width <= max_dimension and height <= max_dimension:
        return width, height

    if width > height:
        scale = max_dimension / width
    else:
        scale = max_dimension / height

    return int(width * scale), int(height * scale)


def render_pdf_preview(
    pdf_bytes: bytes,
    dpi: Optional[int] = None,
    max_dimension: int = MAX_PREVIEW_DIMENSION,
) -> bytes:
    """
    Render page 1 of a PDF to PNG bytes.

    Args:
        pdf_bytes: PDF document
        dpi: Render resolution (defaults to config.PREVIEW_DPI)
        max_dimension: Maximum width or height for the preview

    Returns:
        bytes: PNG image
    """
    if dpi is None:
        dpi = config.PREVIEW_DPI

    doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        page = doc.load_page(0)
        zoom = dpi / 72.0
        pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
        img = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
    finally:
        doc.close()

    new_width, new_height = _calculate_scaled_dimensions(img.width, img.height, max_dimension)
    if (new_width, new_height) != img.size:
        img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


def pdf_page_sizes(pdf_bytes: bytes) -> List[Tuple[float, float]]:
    """(width, height) in points for every page of the document."""
    doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        return [(page.rect.width, page.rect.height) for page in doc]
    finally:
        doc.close()
