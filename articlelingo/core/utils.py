"""
Shared utility functions.
"""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime, timezone


def generate_id(prefix: str = "") -> str:
    """
    Generate a unique ID with optional prefix.

    Args:
        prefix: Optional prefix (e.g., "content", "tr")

    Returns:
        A unique ID like "tr_a1b2c3d4e5f6"
    """
    uid = str(uuid.uuid4())[:12]
    return f"{prefix}_{uid}" if prefix else uid


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def content_hash(*parts: str, algorithm: str = "sha256") -> str:
    """Hex digest of the parts joined by a unit separator; one part hashes as itself."""
    data = "\x1f".join(parts).encode("utf-8", "surrogatepass")
    return hashlib.new(algorithm, data).hexdigest()
