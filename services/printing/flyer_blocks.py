"""
Flyer Block Renderers

Each flowed block takes a cursor Y measured from the top of the page and
returns the cursor Y after drawing. The BlockContext converts top-down
positions onto ReportLab's bottom-up canvas, so every block can be
exercised against a mock canvas.

Blocks:
  - Header: title + property type label (fixed span)
  - Image: aspect-fitted photo, zero height when absent or undecodable
  - Details: price/size row, address, description (clipped, never paginated)
  - Contact: heading + one line per non-empty field
  - Footer: fixed to the bottom margin, independent of the cursor
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from reportlab.lib.utils import ImageReader

from constants import (
    PAGE_WIDTH, PAGE_HEIGHT, PAGE_MARGIN, IMAGE_TOP, IMAGE_MAX_HEIGHT, BLOCK_GAP,
    TITLE_FONT_SIZE, TYPE_LABEL_FONT_SIZE, TYPE_LABEL_OFFSET, HEADER_HEIGHT,
    HEADING_FONT_SIZE, BODY_FONT_SIZE, VALUE_FONT_SIZE, FOOTER_FONT_SIZE,
    COLUMN_WIDTH, COLUMN_GUTTER, PRICE_ROW_HEIGHT, VALUE_OFFSET, LABEL_LINE_HEIGHT,
    ADDRESS_BOX_HEIGHT, DESCRIPTION_GAP, DESCRIPTION_LINE_SPACING, DESCRIPTION_MAX_HEIGHT,
    CONTACT_HEADING_HEIGHT, CONTACT_LINE_HEIGHT, FOOTER_LINE_GAP,
    COLOR_DARK_GRAY, COLOR_MEDIUM_GRAY, COLOR_PRIMARY_BLUE,
    PRICE_LABEL, SIZE_LABEL, ADDRESS_LABEL, DESCRIPTION_LABEL, CONTACT_HEADING,
)
from models import ContactInfo, ListingRecord
from services.printing.errors import ImageDecodeFailure
from services.printing.layout_utils import FontSet, DEFAULT_FONTS, hex_to_rgb
from utils.image_processing import decode_image, fit_image
from utils.pdf_text import (
    measure_text_block, lines_within, line_height, truncate_to_width, block_height,
)
from utils.timestamps import format_long_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlyerLayout:
    """
    Page geometry for one flyer.

    image_top=None switches the photo to start directly below the header's
    span instead of the fixed page offset.
    """
    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT
    margin: float = PAGE_MARGIN
    image_top: Optional[float] = IMAGE_TOP
    image_max_height: float = IMAGE_MAX_HEIGHT
    block_gap: float = BLOCK_GAP

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin


@dataclass
class BlockContext:
    """Everything a block needs to draw: the canvas, fonts and geometry."""
    canvas: object
    fonts: FontSet = DEFAULT_FONTS
    layout: FlyerLayout = FlyerLayout()

    def baseline(self, top: float, font_size: float) -> float:
        """Canvas Y of the baseline for text whose top edge sits at `top`."""
        return self.layout.page_height - (top + font_size)

    def canvas_y(self, top: float, height: float) -> float:
        """Canvas Y of the bottom edge of a box whose top edge sits at `top`."""
        return self.layout.page_height - (top + height)

    def text(self, value: str, x: float, top: float, font: str, size: float, color: str, align: str = "left"):
        c = self.canvas
        c.setFillColorRGB(*hex_to_rgb(color))
        c.setFont(font, size)
        y = self.baseline(top, size)
        if align == "center":
            c.drawCentredString(x, y, value)
        else:
            c.drawString(x, y, value)


def _draw_clipped_lines(
    ctx: BlockContext,
    lines: List[str],
    top: float,
    box_height: float,
    font: str,
    size: float,
    color: str,
    line_spacing: float = 0.0,
) -> int:
    """
    Draw wrapped lines inside a box, dropping any line that does not fit whole.

    Returns the number of lines drawn.
    """
    visible = lines[:lines_within(box_height, size, line_spacing)]
    if not visible:
        return 0

    c = ctx.canvas
    x = ctx.layout.margin
    c.saveState()
    clip = c.beginPath()
    clip.rect(x, ctx.canvas_y(top, box_height), ctx.layout.content_width, box_height)
    c.clipPath(clip, stroke=0, fill=0)

    step = line_height(size) + line_spacing
    for i, line in enumerate(visible):
        ctx.text(line, x, top + i * step, font, size, color)

    c.restoreState()
    return len(visible)


def draw_header(ctx: BlockContext, record: ListingRecord, start_y: float) -> float:
    """
    Title (bold 28, one line, ellipsized) and uppercased property type.

    Always returns start_y + HEADER_HEIGHT: the header span does not depend
    on its content.
    """
    fonts, layout = ctx.fonts, ctx.layout
    center_x = layout.margin + layout.content_width / 2

    title = truncate_to_width(record.title, fonts.bold, TITLE_FONT_SIZE, layout.content_width)
    if title:
        ctx.text(title, center_x, start_y, fonts.bold, TITLE_FONT_SIZE, COLOR_DARK_GRAY, align="center")

    label = record.property_type.display_name.upper()
    ctx.text(label, center_x, start_y + TYPE_LABEL_OFFSET, fonts.medium, TYPE_LABEL_FONT_SIZE,
             COLOR_PRIMARY_BLUE, align="center")

    return start_y + HEADER_HEIGHT


def draw_image(ctx: BlockContext, record: ListingRecord, start_y: float) -> float:
    """
    Photo fitted into content width x image_max_height, centered.

    Returns start_y unchanged when there is no photo or it cannot be decoded.
    """
    if not record.image_bytes:
        return start_y

    try:
        img = decode_image(record.image_bytes)
    except ImageDecodeFailure as e:
        logger.warning(f"[Flyer] Skipping photo for listing {record.id}: {e}", extra={"listing_id": record.id})
        return start_y

    layout = ctx.layout
    fitted = fit_image(img.width, img.height, layout.content_width, layout.image_max_height,
                       content_width=layout.content_width)

    ctx.canvas.drawImage(
        ImageReader(img),
        layout.margin + fitted.x_offset,
        ctx.canvas_y(start_y, fitted.height),
        width=fitted.width,
        height=fitted.height,
        mask='auto' if img.mode == "RGBA" else None,
    )
    return start_y + fitted.height


def draw_details(ctx: BlockContext, record: ListingRecord, start_y: float) -> float:
    """
    Price/size row, then address and description when present.

    Address is clipped to a fixed box; description height is capped at
    DESCRIPTION_MAX_HEIGHT. Neither ever spills onto another page.
    """
    fonts, layout = ctx.fonts, ctx.layout
    left_x = layout.margin
    right_x = layout.margin + COLUMN_WIDTH + COLUMN_GUTTER
    y = start_y

    # 1. Price / Size row
    ctx.text(PRICE_LABEL, left_x, y, fonts.semibold, HEADING_FONT_SIZE, COLOR_DARK_GRAY)
    ctx.text(record.formatted_price, left_x, y + VALUE_OFFSET, fonts.medium, VALUE_FONT_SIZE, COLOR_PRIMARY_BLUE)
    ctx.text(SIZE_LABEL, right_x, y, fonts.semibold, HEADING_FONT_SIZE, COLOR_DARK_GRAY)
    ctx.text(record.formatted_size, right_x, y + VALUE_OFFSET, fonts.medium, VALUE_FONT_SIZE, COLOR_PRIMARY_BLUE)
    y += PRICE_ROW_HEIGHT

    # 2. Address
    if record.address:
        ctx.text(ADDRESS_LABEL, left_x, y, fonts.semibold, HEADING_FONT_SIZE, COLOR_DARK_GRAY)
        y += LABEL_LINE_HEIGHT
        metrics = measure_text_block(record.address, fonts.body, BODY_FONT_SIZE, layout.content_width)
        _draw_clipped_lines(ctx, metrics.lines, y, ADDRESS_BOX_HEIGHT, fonts.body, BODY_FONT_SIZE,
                            COLOR_MEDIUM_GRAY)
        y += ADDRESS_BOX_HEIGHT

    # 3. Description
    if record.description:
        y += DESCRIPTION_GAP
        ctx.text(DESCRIPTION_LABEL, left_x, y, fonts.semibold, HEADING_FONT_SIZE, COLOR_DARK_GRAY)
        y += LABEL_LINE_HEIGHT
        metrics = measure_text_block(record.description, fonts.body, BODY_FONT_SIZE, layout.content_width,
                                     line_spacing=DESCRIPTION_LINE_SPACING)
        box_height = min(metrics.height, DESCRIPTION_MAX_HEIGHT)
        drawn = _draw_clipped_lines(ctx, metrics.lines, y, box_height, fonts.body, BODY_FONT_SIZE,
                                    COLOR_MEDIUM_GRAY, line_spacing=DESCRIPTION_LINE_SPACING)
        if drawn < metrics.line_count:
            logger.debug(f"[Flyer] Description clipped to {drawn}/{metrics.line_count} lines")
        y += box_height

    return y


def contact_lines(contact: ContactInfo) -> List[str]:
    """Lines for the contact block, in draw order, skipping empty fields."""
    lines = []
    if contact.name:
        lines.append(contact.name)
    if contact.company:
        lines.append(contact.company)
    if contact.phone:
        lines.append(f"Phone: {contact.phone}")
    if contact.email:
        lines.append(f"Email: {contact.email}")
    return lines


def draw_contact(ctx: BlockContext, record: ListingRecord, start_y: float) -> float:
    fonts = ctx.fonts
    x = ctx.layout.margin
    y = start_y

    ctx.text(CONTACT_HEADING, x, y, fonts.semibold, HEADING_FONT_SIZE, COLOR_DARK_GRAY)
    y += CONTACT_HEADING_HEIGHT

    for line in contact_lines(record.contact):
        ctx.text(line, x, y, fonts.body, BODY_FONT_SIZE, COLOR_MEDIUM_GRAY)
        y += CONTACT_LINE_HEIGHT

    return y


def draw_footer(ctx: BlockContext, generated_at: datetime, branding: str) -> float:
    """
    Generation date on the bottom margin, branding line 15pt above it.

    Returns the top of the branding line. May overlap a very long contact
    block; nothing here pushes content onto another page.
    """
    fonts, layout = ctx.fonts, ctx.layout
    center_x = layout.page_width / 2

    date_top = layout.page_height - layout.margin - block_height(1, FOOTER_FONT_SIZE)
    ctx.text(f"Generated on {format_long_date(generated_at)}", center_x, date_top,
             fonts.body, FOOTER_FONT_SIZE, COLOR_MEDIUM_GRAY, align="center")

    branding_top = date_top - FOOTER_LINE_GAP
    ctx.text(f"Created with {branding}", center_x, branding_top,
             fonts.body, FOOTER_FONT_SIZE, COLOR_MEDIUM_GRAY, align="center")

    return branding_top
