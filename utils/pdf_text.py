"""
PDF Text Measurement Utilities

Shared primitives for measuring and wrapping text in ReportLab PDFs.
The flyer blocks draw exactly the lines returned by wrap_text, so a
measured height and a drawn height can never disagree.

Rules:
- Word-wrap on whitespace, no hyphenation
- A word wider than the box is split by character
- Never rasterize text - always draw as vector text objects
"""
from dataclasses import dataclass, field
from typing import List

from reportlab.pdfbase.pdfmetrics import stringWidth

from constants import LEADING_RATIO

ELLIPSIS = "..."


@dataclass(frozen=True)
class TextMetrics:
    line_count: int
    height: float
    lines: List[str] = field(default_factory=list)


def measure_text_width(text: str, font_name: str, font_size: float) -> float:
    """
    Measure text width in points using ReportLab's stringWidth.

    Args:
        text: Text to measure
        font_name: Registered font name
        font_size: Font size in points

    Returns:
        Width in points
    """
    if not text:
        return 0.0
    return stringWidth(str(text), font_name, font_size)


def line_height(font_size: float) -> float:
    return font_size * LEADING_RATIO


def wrap_text(text: str, font_name: str, font_size: float, max_width_pts: float) -> List[str]:
    """
    Wrap text to fit within max_width, returning every line.

    Unlike sign copy there is no line cap here: callers that clip (address,
    description) decide how many of the returned lines are visible.

    Args:
        text: Text to wrap
        font_name: Registered font name
        font_size: Font size in points
        max_width_pts: Maximum width per line in points

    Returns:
        List of wrapped lines
    """
    if not text:
        return []

    words = str(text).split()
    if not words:
        return []

    lines = []
    current_line = ""

    for word in words:
        if measure_text_width(word, font_name, font_size) > max_width_pts:
            # Split long word by character
            if current_line:
                lines.append(current_line)
                current_line = ""

            char_line = ""
            for char in word:
                test_line = char_line + char
                if not char_line or measure_text_width(test_line, font_name, font_size) <= max_width_pts:
                    char_line = test_line
                else:
                    lines.append(char_line)
                    char_line = char
            current_line = char_line
            continue

        test_line = f"{current_line} {word}" if current_line else word
        if measure_text_width(test_line, font_name, font_size) <= max_width_pts:
            current_line = test_line
        else:
            lines.append(current_line)
            current_line = word

    if current_line:
        lines.append(current_line)

    return lines


def block_height(line_count: int, font_size: float, line_spacing: float = 0.0) -> float:
    """Height of line_count stacked lines with line_spacing between them."""
    if line_count <= 0:
        return 0.0
    return line_count * line_height(font_size) + (line_count - 1) * line_spacing


def measure_text_block(
    text: str,
    font_name: str,
    font_size: float,
    max_width: float,
    line_spacing: float = 0.0
) -> TextMetrics:
    """
    Wrap text and report its line count and total bounding height.

    Raises:
        ValueError: if max_width or font_size is not positive
    """
    if max_width <= 0:
        raise ValueError(f"max_width must be positive, got {max_width}")
    if font_size <= 0:
        raise ValueError(f"font_size must be positive, got {font_size}")

    lines = wrap_text(text, font_name, font_size, max_width)
    return TextMetrics(
        line_count=len(lines),
        height=block_height(len(lines), font_size, line_spacing),
        lines=lines,
    )


def lines_within(max_height: float, font_size: float, line_spacing: float = 0.0) -> int:
    """How many whole lines fit inside max_height."""
    count = 0
    while block_height(count + 1, font_size, line_spacing) <= max_height:
        count += 1
    return count


def truncate_to_width(text: str, font_name: str, font_size: float, max_width_pts: float) -> str:
    """
    Shorten text with a trailing ellipsis so it fits on one line.

    Returns text unchanged when it already fits.
    """
    if not text:
        return ""
    text = str(text)
    if measure_text_width(text, font_name, font_size) <= max_width_pts:
        return text

    clipped = text
    while clipped and measure_text_width(clipped.rstrip() + ELLIPSIS, font_name, font_size) > max_width_pts:
        clipped = clipped[:-1]
    return clipped.rstrip() + ELLIPSIS
