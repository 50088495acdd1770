"""
Layout Utilities for flyer PDFs.

Handles:
1. Font Registration (Inter Family, with Helvetica Fallbacks).
2. Colour conversion for ReportLab fills.
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError

logger = logging.getLogger(__name__)

TARGET_FONTS = {
    "Inter-Regular.ttf": "Inter-Regular",
    "Inter-Medium.ttf": "Inter-Medium",
    "Inter-SemiBold.ttf": "Inter-SemiBold",
    "Inter-Bold.ttf": "Inter-Bold",
}


@dataclass(frozen=True)
class FontSet:
    """Font names per typographic role, already registered with ReportLab."""
    body: str = "Helvetica"
    medium: str = "Helvetica"
    semibold: str = "Helvetica-Bold"
    bold: str = "Helvetica-Bold"


# Safe Fallbacks (Helvetica is built into every PDF viewer)
DEFAULT_FONTS = FontSet()


def _find_font_files(fonts_dir: Optional[str]) -> dict:
    found = {}
    if not fonts_dir or not os.path.isdir(fonts_dir):
        return found
    for root, dirs, files in os.walk(fonts_dir):
        for f in files:
            if f in TARGET_FONTS:
                found[f] = os.path.join(root, f)
    return found


def _register(face_name: str, path: str) -> None:
    if face_name in pdfmetrics.getRegisteredFontNames():
        return
    pdfmetrics.registerFont(TTFont(face_name, path))


def resolve_fonts(fonts_dir: Optional[str] = None, required: bool = False) -> FontSet:
    """
    Register Inter fonts found under fonts_dir and return the FontSet to draw with.

    Registration is idempotent. Medium and SemiBold fall back to Regular and
    Bold when only the two essential faces are present.

    Raises:
        RuntimeError: if required is True and Inter Regular/Bold are missing
            or fail to register
    """
    found = _find_font_files(fonts_dir)
    has_required = "Inter-Regular.ttf" in found and "Inter-Bold.ttf" in found

    if not has_required:
        if required:
            raise RuntimeError(
                f"CRITICAL: Required Inter fonts (Regular/Bold) missing from {fonts_dir}. Flyers cannot be generated."
            )
        if found:
            logger.warning(f"[Fonts] Incomplete Inter set in {fonts_dir}; using Helvetica.")
        return DEFAULT_FONTS

    try:
        for filename, face_name in TARGET_FONTS.items():
            if filename in found:
                _register(face_name, found[filename])
    except (TTFError, OSError) as e:
        if required:
            raise RuntimeError(f"CRITICAL: Failed to register Inter fonts: {e}") from e
        logger.warning(f"[Fonts] Failed to register Inter fonts: {e}. Using Helvetica.")
        return DEFAULT_FONTS

    return FontSet(
        body="Inter-Regular",
        medium="Inter-Medium" if "Inter-Medium.ttf" in found else "Inter-Regular",
        semibold="Inter-SemiBold" if "Inter-SemiBold.ttf" in found else "Inter-Bold",
        bold="Inter-Bold",
    )


def hex_to_rgb(hex_color: str) -> tuple:
    """Convert hex color to RGB tuple (0-1 range for reportlab)."""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) / 255 for i in (0, 2, 4))
