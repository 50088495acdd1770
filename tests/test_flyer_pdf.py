"""
End-to-end flyer PDF tests.

Generated PDFs are inspected with PyMuPDF: page count, page size, drawn text
and embedded images.
"""
import fitz  # PyMuPDF
import pytest
from unittest.mock import patch

from models import ContactInfo, PriceType
from services.printing.errors import SerializationFailure
from services.printing.flyer import FlyerComposer, generate_flyer_pdf
from services.printing.flyer_blocks import FlyerLayout


def _open(pdf_bytes):
    return fitz.open(stream=pdf_bytes, filetype="pdf")


def _page_text(pdf_bytes):
    doc = _open(pdf_bytes)
    try:
        return doc[0].get_text()
    finally:
        doc.close()


class TestFlyerComposer:

    def test_main_st_office_scenario(self, composer, make_record, generated_at):
        record = make_record(description="", contact=ContactInfo(name="Jane Doe"), image_bytes=None)

        pdf_bytes = composer.compose(record, generated_at=generated_at)

        assert pdf_bytes.startswith(b"%PDF")
        doc = _open(pdf_bytes)
        try:
            assert doc.page_count == 1
            assert doc[0].rect.width == pytest.approx(612)
            assert doc[0].rect.height == pytest.approx(792)
            text = doc[0].get_text()
        finally:
            doc.close()

        for expected in ("Main St Office", "OFFICE", "$1,200,000", "5,000 sq ft", "123 Main St",
                         "CONTACT INFORMATION", "Jane Doe",
                         "Generated on October 18, 2026", "Created with CRE Flyer Maker"):
            assert expected in text
        assert "Phone:" not in text
        assert "Email:" not in text
        assert "DESCRIPTION" not in text

    def test_output_is_deterministic(self, composer, make_record, make_image_bytes, generated_at):
        record = make_record(description="Two floors of open-plan space.",
                             image_bytes=make_image_bytes(640, 480))

        first = composer.compose(record, generated_at=generated_at)
        second = composer.compose(record, generated_at=generated_at)

        assert first == second

    def test_clock_supplies_default_timestamp(self, make_record, generated_at):
        composer = FlyerComposer(clock=lambda: generated_at)
        assert "Generated on October 18, 2026" in _page_text(composer.compose(make_record()))

    def test_missing_and_undecodable_image_degrade_identically(self, composer, make_record):
        absent = composer.compose_with_report(make_record(image_bytes=None))
        broken = composer.compose_with_report(make_record(image_bytes=b"not an image at all"))

        assert absent.layout.blocks["details"][0] == broken.layout.blocks["details"][0] == 150
        assert absent.layout.height("image") == broken.layout.height("image") == 0

    def test_photo_is_embedded_once(self, composer, make_record, make_image_bytes):
        result = composer.compose_with_report(make_record(image_bytes=make_image_bytes(800, 400)))

        doc = _open(result.pdf_bytes)
        try:
            assert len(doc[0].get_images(full=True)) == 1
        finally:
            doc.close()
        assert result.layout.blocks["image"] == pytest.approx((120, 390))
        assert result.layout.blocks["details"][0] == pytest.approx(420)

    def test_no_photo_means_no_images(self, composer, make_record):
        doc = _open(composer.compose(make_record()))
        try:
            assert doc[0].get_images(full=True) == []
        finally:
            doc.close()

    def test_empty_fields_leave_sixty_point_details(self, composer, make_record):
        result = composer.compose_with_report(make_record(address="", description=""))

        assert result.layout.height("details") == 60
        text = _page_text(result.pdf_bytes)
        assert "ADDRESS" not in text
        assert "DESCRIPTION" not in text

    def test_lease_price_rendered(self, composer, make_record):
        record = make_record(price=3000, price_type=PriceType.LEASE)
        assert "$3,000/month" in _page_text(composer.compose(record))

    def test_blocks_run_in_order(self, composer, make_record):
        result = composer.compose_with_report(make_record(description="Corner unit."))
        blocks = result.layout.blocks

        assert list(blocks) == ["header", "image", "details", "contact", "footer"]
        assert blocks["header"] == (36, 101)
        assert blocks["details"][0] == blocks["image"][1] + 30
        assert blocks["contact"][0] == blocks["details"][1] + 30

    def test_record_is_not_mutated(self, composer, make_record, make_image_bytes):
        record = make_record(image_bytes=make_image_bytes(50, 50))
        before = repr(record), record.image_bytes
        composer.compose(record)
        assert (repr(record), record.image_bytes) == before

    def test_measured_image_offset(self, make_record, make_image_bytes):
        composer = FlyerComposer(layout=FlyerLayout(image_top=None))
        result = composer.compose_with_report(make_record(image_bytes=make_image_bytes(800, 400)))
        assert result.layout.blocks["image"][0] == 101

    def test_serialization_failure_is_fatal(self, composer, make_record):
        with patch("services.printing.flyer.canvas.Canvas") as canvas_cls:
            canvas_cls.return_value.save.side_effect = MemoryError("out of memory")
            with pytest.raises(SerializationFailure):
                composer.compose(make_record())

    def test_overflowing_contact_still_renders_one_page(self, composer, make_record):
        record = make_record(
            address="Suite 100 " * 40,
            description="Large open floor plate. " * 80,
            contact=ContactInfo(name="Jane Doe", company="Acme CRE", phone="555-0100", email="jane@example.com"),
        )
        doc = _open(composer.compose(record))
        try:
            assert doc.page_count == 1
        finally:
            doc.close()


def test_generate_flyer_pdf_uses_configured_branding(make_record, generated_at):
    pdf_bytes = generate_flyer_pdf(make_record(), generated_at=generated_at)
    assert "Created with CRE Flyer Maker" in _page_text(pdf_bytes)
