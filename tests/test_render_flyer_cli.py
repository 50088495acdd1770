"""
Tests for scripts/render_flyer.py.
"""
import importlib.util
import json
import logging
import os

import fitz  # PyMuPDF
import pytest

SCRIPT_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "scripts", "render_flyer.py")


@pytest.fixture
def cli():
    spec = importlib.util.spec_from_file_location("render_flyer", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_sample_render_with_preview(cli, tmp_path, capsys):
    out_pdf = tmp_path / "flyer.pdf"
    out_png = tmp_path / "flyer.png"

    assert cli.main(["--sample", "-o", str(out_pdf), "--preview", str(out_png)]) == 0

    doc = fitz.open(str(out_pdf))
    try:
        assert doc.page_count == 1
        assert "Main St Office" in doc[0].get_text()
    finally:
        doc.close()
    assert out_png.stat().st_size > 0
    assert "Wrote" in capsys.readouterr().out


def test_json_listing_with_image(cli, tmp_path, make_image_bytes):
    listing = tmp_path / "listing.json"
    listing.write_text(json.dumps({
        "title": "Harbor Warehouse",
        "propertyType": "Industrial",
        "size": 12000,
        "sizeUnit": "sq ft",
        "price": 8500,
        "priceType": "For Lease",
        "contact": {"name": "Sam Lee"},
    }))
    photo = tmp_path / "photo.png"
    photo.write_bytes(make_image_bytes(400, 300))
    out_pdf = tmp_path / "out.pdf"

    assert cli.main([str(listing), "--image", str(photo), "-o", str(out_pdf)]) == 0

    doc = fitz.open(str(out_pdf))
    try:
        text = doc[0].get_text()
        assert "$8,500/month" in text
        assert "INDUSTRIAL" in text
        assert len(doc[0].get_images()) == 1
    finally:
        doc.close()


def test_qr_content_flag(cli, tmp_path, capsys):
    assert cli.main(["--sample", "-o", str(tmp_path / "f.pdf"), "--qr-content"]) == 0
    out = capsys.readouterr().out
    assert "Property: Main St Office" in out


def test_invalid_listing_returns_error(cli, tmp_path):
    listing = tmp_path / "bad.json"
    listing.write_text(json.dumps({"title": "X", "price": -5}))
    assert cli.main([str(listing), "-o", str(tmp_path / "x.pdf")]) == 1
    assert not (tmp_path / "x.pdf").exists()


def test_missing_listing_file_returns_error(cli, tmp_path):
    assert cli.main([str(tmp_path / "nope.json")]) == 1


def test_malformed_contact_returns_error(cli, tmp_path):
    listing = tmp_path / "bad_contact.json"
    listing.write_text(json.dumps({"title": "X", "contact": "Jane Doe"}))
    assert cli.main([str(listing), "-o", str(tmp_path / "x.pdf")]) == 1
    assert not (tmp_path / "x.pdf").exists()
