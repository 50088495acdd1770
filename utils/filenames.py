"""
Filename utilities for flyer exports.

Share and storage collaborators name the PDF after the listing title; the
listing id suffix keeps two listings with the same title apart.
"""
import re

from constants import LAYOUT_VERSION


def slugify_text(text: str, max_length: int = 60) -> str:
    """
    Convert text to a safe slug: [a-z0-9_-] only, max length enforced.

    Args:
        text: Input text to slugify
        max_length: Maximum length of output (default 60)

    Returns:
        Safe slug string
    """
    if not text:
        return "unnamed"

    s = str(text).lower()

    # Replace common separators with underscore
    s = re.sub(r'[\s\-./\\,]+', '_', s)

    # Remove any character not in allowlist
    s = re.sub(r'[^a-z0-9_-]', '', s)

    s = re.sub(r'_+', '_', s)
    s = s.strip('_-')

    if len(s) > max_length:
        s = s[:max_length].rstrip('_-')

    return s if s else "unnamed"


def flyer_filename(record, extension: str = "pdf") -> str:
    """
    Deterministic export filename for a listing flyer.

    Example:
        "Main St Office" -> "main_st_office_flyer_v1_1a2b3c4d.pdf"
    """
    short_id = str(record.id).replace("-", "")[:8]
    return f"{slugify_text(record.title)}_flyer_v{LAYOUT_VERSION}_{short_id}.{extension}"
