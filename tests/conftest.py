"""
Pytest fixtures for flyer renderer tests.

Provides listing records, synthesized photos, a fixed generation timestamp
and a mock canvas for block-level tests.
"""
import io
import os
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

# Set test environment before importing config
os.environ['APP_STAGE'] = 'test'
os.environ.pop('FLYER_FONTS_DIR', None)
os.environ.pop('FLYER_BRANDING', None)
os.environ.pop('TRACKING_BASE_URL', None)

from PIL import Image

from models import ContactInfo, ListingRecord, PriceType, PropertyType, SizeUnit
from services.printing.flyer import FlyerComposer
from services.printing.flyer_blocks import BlockContext

FIXED_NOW = datetime(2026, 10, 18, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def generated_at():
    return FIXED_NOW


@pytest.fixture
def make_record():
    """Factory for listing records with sensible defaults."""
    def _make(**overrides):
        defaults = {
            'title': "Main St Office",
            'property_type': PropertyType.OFFICE,
            'size': 5000,
            'size_unit': SizeUnit.SQFT,
            'price': 1200000,
            'price_type': PriceType.SALE,
            'address': "123 Main St",
            'description': "",
            'contact': ContactInfo(name="Jane Doe"),
            'image_bytes': None,
            'created_at': FIXED_NOW,
        }
        defaults.update(overrides)
        return ListingRecord(**defaults)
    return _make


@pytest.fixture
def make_image_bytes():
    """Factory for encoded raster images of a given size."""
    def _make(width=800, height=400, mode="RGB", fmt="PNG"):
        color = (30, 90, 160, 255) if mode == "RGBA" else (30, 90, 160)
        if mode == "L":
            color = 90
        img = Image.new(mode, (width, height), color)
        out = io.BytesIO()
        img.save(out, format=fmt)
        return out.getvalue()
    return _make


@pytest.fixture
def mock_canvas():
    return MagicMock()


@pytest.fixture
def ctx(mock_canvas):
    return BlockContext(canvas=mock_canvas)


@pytest.fixture
def composer():
    return FlyerComposer(clock=lambda: FIXED_NOW)


@pytest.fixture
def drawn_strings(mock_canvas):
    """Callable returning every string drawn on the mock canvas, in order."""
    def _strings():
        return [
            args[2] for name, args, kwargs in mock_canvas.method_calls
            if name in ("drawString", "drawCentredString")
        ]
    return _strings
