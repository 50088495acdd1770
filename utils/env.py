"""
Environment variable helpers for flyer configuration.
"""
import os
from typing import Optional


def get_env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Stripped value of an environment variable, or default when unset or blank.

    FLYER_BRANDING is drawn verbatim on the page, so surrounding whitespace
    never survives.
    """
    value = (os.getenv(name) or "").strip()
    return value or default


def get_env_bool(name: str, default: bool = False) -> bool:
    """True for "1", "true", "yes", "on" (case-insensitive); default when unset."""
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


def get_env_int(name: str, default: int) -> int:
    """
    Read an integer environment variable.

    Non-numeric values raise ValueError naming the variable, so a typo in
    PREVIEW_DPI fails at boot instead of at render time.
    """
    value = get_env_str(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be an integer, got: {value!r}")
