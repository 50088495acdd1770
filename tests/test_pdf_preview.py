import io

import pytest
from PIL import Image

from utils.pdf_preview import _calculate_scaled_dimensions, pdf_page_sizes, render_pdf_preview


def test_preview_is_letter_shaped_png(composer, make_record):
    pdf_bytes = composer.compose(make_record())

    png = render_pdf_preview(pdf_bytes, dpi=72)

    img = Image.open(io.BytesIO(png))
    assert img.format == "PNG"
    assert img.size == (612, 792)


def test_preview_is_capped(composer, make_record):
    png = render_pdf_preview(composer.compose(make_record()), dpi=300, max_dimension=1000)
    img = Image.open(io.BytesIO(png))
    assert max(img.size) <= 1000


def test_page_sizes(composer, make_record):
    sizes = pdf_page_sizes(composer.compose(make_record()))
    assert sizes == [pytest.approx((612, 792))]


@pytest.mark.parametrize("w,h,cap,expected", [
    (500, 400, 1800, (500, 400)),
    (2000, 4000, 1000, (500, 1000)),
    (4000, 2000, 1000, (1000, 500)),
])
def test_calculate_scaled_dimensions(w, h, cap, expected):
    assert _calculate_scaled_dimensions(w, h, cap) == expected
