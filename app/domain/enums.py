"""Domain enumerations for the Fragments service.

Enums represent fixed sets of domain values (e.g. supported media types).
"""

from enum import Enum


class FragmentType(str, Enum):
    """Base media types a fragment may be stored as.

    Parameters such as charset are not part of the enum value; compare
    against a parsed base type.
    """

    TEXT_PLAIN = "text/plain"
    TEXT_MARKDOWN = "text/markdown"
    TEXT_HTML = "text/html"
    TEXT_CSV = "text/csv"
    APPLICATION_JSON = "application/json"

    @classmethod
    def values(cls) -> list[str]:
        """Return all supported base types as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [member.value for member in cls]


class StorageBackend(str, Enum):
    """Configured fragment store implementation."""

    MEMORY = "memory"
    LOCAL = "local"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
