"""Cross-cutting helpers used by every layer (timestamps, ids, logging). No business logic."""

from app.shared.utils import generate_fragment_id, to_iso_utc, utc_now, utc_now_iso

__all__ = [
    "generate_fragment_id",
    "to_iso_utc",
    "utc_now",
    "utc_now_iso",
]
