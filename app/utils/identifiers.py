"""
Guest identifier normalization
"""

import secrets
import time


def normalize_id(name: str) -> str:
    """Derive a guest id from a display name.

    Trims and lower-cases the name. Blank names get a placeholder id built
    from the current time in milliseconds plus a random suffix, so that two
    blank-name inserts in the same millisecond still get distinct ids.
    """
    trimmed = (name or "").strip()
    if not trimmed:
        return f"guest-{int(time.time() * 1000)}-{secrets.token_hex(4)}"
    return trimmed.lower()
