"""Shared utilities: fragment timestamps and id generation."""

from app.shared.utils.datetime import to_iso_utc, utc_now, utc_now_iso
from app.shared.utils.generators import generate_fragment_id

__all__ = [
    "generate_fragment_id",
    "to_iso_utc",
    "utc_now",
    "utc_now_iso",
]
