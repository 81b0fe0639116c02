"""Domain value objects and shared value types."""

from app.domain.value_objects.fragment_record import FragmentRecord
from app.domain.value_objects.media_type import MediaType

__all__ = [
    "FragmentRecord",
    "MediaType",
]
