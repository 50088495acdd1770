#!/usr/bin/env python3
"""
Render a listing flyer PDF from a JSON listing record.

Usage:
    python scripts/render_flyer.py listing.json --image photo.jpg -o flyer.pdf
    python scripts/render_flyer.py --sample --preview flyer.png
"""
import os
import sys
import json
import argparse
import logging

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from models import ListingRecord
from services.printing.errors import FlyerRenderError
from services.printing.flyer import build_composer
from utils.filenames import flyer_filename
from utils.logger import setup_logging
from utils.pdf_preview import render_pdf_preview
from utils.qr_urls import listing_qr_content

logger = logging.getLogger("render_flyer")

# Sample data for standalone rendering
SAMPLE_LISTING = {
    "title": "Main St Office",
    "property_type": "Office",
    "size": 5000,
    "size_unit": "sq ft",
    "price": 1200000,
    "price_type": "For Sale",
    "address": "123 Main St, Springfield",
    "description": (
        "Corner office building with street-level retail frontage, "
        "two floors of open-plan workspace and 20 reserved parking spaces."
    ),
    "contact": {
        "name": "Jane Doe",
        "company": "Premier Commercial Realty",
        "phone": "(555) 123-4567",
        "email": "jane@premiercre.com",
    },
}


def build_parser():
    parser = argparse.ArgumentParser(description="Render a single-page listing flyer PDF.")
    parser.add_argument("listing", nargs="?", help="Path to a listing JSON file")
    parser.add_argument("--sample", action="store_true", help="Render the built-in sample listing")
    parser.add_argument("--image", help="Property photo to place on the flyer")
    parser.add_argument("-o", "--output", help="Output PDF path (defaults to a name derived from the title)")
    parser.add_argument("--preview", help="Also write a PNG preview of the page to this path")
    parser.add_argument("--qr-content", action="store_true", help="Print the listing's QR payload")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log block positions")
    return parser


def load_listing(args):
    if args.sample:
        data = SAMPLE_LISTING
    elif args.listing:
        with open(args.listing, "r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise SystemExit("error: pass a listing JSON path or --sample")

    image_bytes = None
    if args.image:
        with open(args.image, "rb") as f:
            image_bytes = f.read()

    return ListingRecord.from_dict(data, image_bytes=image_bytes)


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else config.LOG_LEVEL, json_output=config.LOG_JSON)

    try:
        record = load_listing(args)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load listing: {e}")
        return 1

    try:
        result = build_composer().compose_with_report(record)
    except FlyerRenderError as e:
        logger.error(f"Flyer render failed: {e}")
        return 1

    for name, (start_y, end_y) in result.layout.blocks.items():
        logger.debug(f"{name:<8} {start_y:7.1f} -> {end_y:7.1f}")

    output_path = args.output or flyer_filename(record)
    with open(output_path, "wb") as f:
        f.write(result.pdf_bytes)
    logger.info(f"Saved flyer for listing {record.id}", extra={"listing_id": record.id, "output_path": output_path})
    print(f"Wrote {output_path} ({len(result.pdf_bytes)} bytes)")

    if args.preview:
        with open(args.preview, "wb") as f:
            f.write(render_pdf_preview(result.pdf_bytes))
        print(f"Wrote {args.preview}")

    if args.qr_content:
        print(listing_qr_content(record))

    return 0


if __name__ == "__main__":
    sys.exit(main())
