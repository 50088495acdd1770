"""
Canonical helpers for listing tracking URLs and QR payloads.

The flyer page does not embed a QR code; these strings are handed to the
QR/share collaborators, which decide where they go.
"""
from datetime import datetime
from typing import Optional

import config
from utils.timestamps import utc_now


def tracking_url(base_url: str, listing_id, timestamp: Optional[datetime] = None) -> str:
    """
    Generate the tracking URL for a listing.
    Format: {base_url}/{LISTING-UUID}?t={epoch_seconds}
    """
    if not listing_id:
        raise ValueError("listing_id is required for tracking URL")

    if timestamp is None:
        timestamp = utc_now()

    clean_base = base_url.rstrip('/')
    return f"{clean_base}/{str(listing_id).upper()}?t={int(timestamp.timestamp())}"


def listing_qr_content(record, base_url: Optional[str] = None, timestamp: Optional[datetime] = None) -> str:
    """
    Multi-line QR payload: tracking URL, key facts and contact lines.
    """
    url = tracking_url(base_url or config.TRACKING_BASE_URL, record.id, timestamp)
    contact = record.contact
    return "\n".join([
        url,
        "",
        f"Property: {record.title}",
        f"Type: {record.property_type.display_name}",
        f"Price: {record.formatted_price}",
        f"Size: {record.formatted_size}",
        "",
        f"Contact: {contact.name}",
        f"Phone: {contact.phone}",
        f"Email: {contact.email}",
    ])
