"""
Listing Flyer PDF Generator

Generates a single-page US Letter flyer for a listing record.
Returns PDF bytes; storing, previewing or sharing them is the caller's job.

Sequence is fixed: Header -> Image -> Details -> Contact -> Footer.
The canvas runs in ReportLab's invariant mode, so the same record and the
same generation timestamp always produce byte-identical output.
"""
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from reportlab.pdfgen import canvas

import config
from constants import DEFAULT_BRANDING
from models import ListingRecord
from services.printing.errors import SerializationFailure
from services.printing.flyer_blocks import (
    BlockContext, FlyerLayout,
    draw_header, draw_image, draw_details, draw_contact, draw_footer,
)
from services.printing.layout_utils import FontSet, DEFAULT_FONTS, resolve_fonts
from utils.timestamps import utc_now

logger = logging.getLogger(__name__)


@dataclass
class LayoutReport:
    """Top-down (start_y, end_y) span of every block drawn on the page."""
    blocks: Dict[str, Tuple[float, float]] = field(default_factory=dict)

    def record(self, name: str, start_y: float, end_y: float) -> None:
        self.blocks[name] = (start_y, end_y)

    def height(self, name: str) -> float:
        start_y, end_y = self.blocks[name]
        return end_y - start_y


@dataclass(frozen=True)
class FlyerRender:
    pdf_bytes: bytes
    layout: LayoutReport


class FlyerComposer:
    """
    Renders listing records into flyer PDFs.

    Construct once with the fonts, geometry and branding to use and pass it
    to whatever renders flyers. A composer holds no per-render state, so one
    instance can serve concurrent renders.
    """

    def __init__(
        self,
        layout: Optional[FlyerLayout] = None,
        fonts: Optional[FontSet] = None,
        branding: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.layout = layout or FlyerLayout()
        self.fonts = fonts or DEFAULT_FONTS
        self.branding = branding or DEFAULT_BRANDING
        self.clock = clock or utc_now

    def compose(self, record: ListingRecord, generated_at: Optional[datetime] = None) -> bytes:
        """
        Render one flyer page.

        Args:
            record: Listing to render (never modified)
            generated_at: Date printed in the footer (defaults to clock())

        Returns:
            bytes: Complete single-page PDF

        Raises:
            SerializationFailure: the PDF could not be finalized
            InvalidImageDimensions: the photo decoded to a zero-sized image
        """
        return self.compose_with_report(record, generated_at).pdf_bytes

    def compose_with_report(self, record: ListingRecord, generated_at: Optional[datetime] = None) -> FlyerRender:
        if generated_at is None:
            generated_at = self.clock()

        layout = self.layout
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=(layout.page_width, layout.page_height), invariant=1)
        c.setTitle(record.title or "Listing Flyer")
        c.setAuthor(record.contact.name or self.branding)
        c.setCreator(self.branding)

        ctx = BlockContext(canvas=c, fonts=self.fonts, layout=layout)
        report = LayoutReport()

        header_bottom = draw_header(ctx, record, layout.margin)
        report.record("header", layout.margin, header_bottom)

        image_top = layout.image_top if layout.image_top is not None else header_bottom
        image_bottom = draw_image(ctx, record, image_top)
        report.record("image", image_top, image_bottom)

        details_top = image_bottom + layout.block_gap
        details_bottom = draw_details(ctx, record, details_top)
        report.record("details", details_top, details_bottom)

        contact_top = details_bottom + layout.block_gap
        contact_bottom = draw_contact(ctx, record, contact_top)
        report.record("contact", contact_top, contact_bottom)

        footer_top = draw_footer(ctx, generated_at, self.branding)
        report.record("footer", footer_top, layout.page_height - layout.margin)

        if contact_bottom > footer_top:
            logger.warning(
                f"[Flyer] Contact block for listing {record.id} ends at {contact_bottom:.1f}, "
                f"overlapping footer at {footer_top:.1f}",
                extra={"listing_id": record.id},
            )

        try:
            c.showPage()
            c.save()
        except Exception as e:
            logger.error(
                f"[Flyer] Failed to serialize flyer for listing {record.id}: {e}",
                exc_info=True,
                extra={"listing_id": record.id},
            )
            raise SerializationFailure(f"Could not finalize flyer PDF: {e}") from e

        pdf_bytes = buffer.getvalue()
        logger.info(
            f"[Flyer] Rendered listing {record.id} ({len(pdf_bytes)} bytes)",
            extra={"listing_id": record.id},
        )
        return FlyerRender(pdf_bytes=pdf_bytes, layout=report)


def build_composer(**overrides) -> FlyerComposer:
    """
    Composer configured from config.py (fonts directory, branding).

    Production refuses to fall back to Helvetica.
    """
    if "fonts" not in overrides:
        overrides["fonts"] = resolve_fonts(config.FONTS_DIR, required=config.IS_PRODUCTION)
    overrides.setdefault("branding", config.BRANDING_NAME)
    return FlyerComposer(**overrides)


def generate_flyer_pdf(record: ListingRecord, generated_at: Optional[datetime] = None) -> bytes:
    """
    Generate the flyer PDF for a listing with the configured composer.

    Returns:
        bytes: Single-page PDF
    """
    return build_composer().compose(record, generated_at=generated_at)
