"""Type registry: supported base types, extension mapping, and conversion capability.

All tables are immutable module constants built once at import; nothing
mutates them at runtime.
"""

from types import MappingProxyType

from app.domain.enums import FragmentType
from app.domain.exceptions import ValidationException
from app.domain.value_objects.media_type import MediaType

SUPPORTED_TYPES: frozenset[str] = frozenset(FragmentType.values())

EXTENSION_TYPES: MappingProxyType[str, str] = MappingProxyType(
    {
        ".txt": FragmentType.TEXT_PLAIN.value,
        ".md": FragmentType.TEXT_MARKDOWN.value,
        ".html": FragmentType.TEXT_HTML.value,
        ".json": FragmentType.APPLICATION_JSON.value,
        ".csv": FragmentType.TEXT_CSV.value,
    }
)

# Source base type -> targets it may be converted into (self included).
CONVERSIONS: MappingProxyType[str, frozenset[str]] = MappingProxyType(
    {
        FragmentType.TEXT_PLAIN.value: frozenset({"text/plain"}),
        FragmentType.TEXT_MARKDOWN.value: frozenset({"text/markdown", "text/html", "text/plain"}),
        FragmentType.TEXT_HTML.value: frozenset({"text/html", "text/plain"}),
        FragmentType.TEXT_CSV.value: frozenset({"text/csv", "text/plain", "application/json"}),
        FragmentType.APPLICATION_JSON.value: frozenset({"application/json", "text/plain"}),
    }
)


def base_type_of(raw: str) -> str:
    """Return the parameter-free base type of raw. Raises ValidationException if malformed."""
    return MediaType.parse(raw).base_type


def is_supported_type(raw: str) -> bool:
    """Return whether raw's base type is supported. Malformed input is False, not an error."""
    try:
        return base_type_of(raw) in SUPPORTED_TYPES
    except ValidationException:
        return False


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def is_valid_extension(ext: str) -> bool:
    if not isinstance(ext, str) or not ext.strip():
        return False
    return _normalize_extension(ext) in EXTENSION_TYPES


def mime_type_for_extension(ext: str) -> str | None:
    """Return the media type for a file extension ('.md' or 'md'), or None if unknown."""
    if not is_valid_extension(ext):
        return None
    return EXTENSION_TYPES[_normalize_extension(ext)]


def conversions_for(base_type: str) -> frozenset[str]:
    """Return the types base_type may be converted into; unknown types convert only to themselves."""
    return CONVERSIONS.get(base_type, frozenset({base_type}))
