"""Conversion engine: transform fragment data between media types.

Pure and stateless. Rules live in an explicit (source, target) table; a pair
without an entry is unsupported even when the capability matrix lists it.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from types import MappingProxyType

import markdown

from app.domain.enums import FragmentType
from app.domain.exceptions import ConversionUnsupportedException, ValidationException
from app.domain.value_objects.media_type import MediaType

ConversionRule = Callable[[bytes, str], bytes]

DEFAULT_CHARSET = "utf-8"

_TAG_RE = re.compile(r"<[^>]*>")


def _markdown_to_html(data: bytes, charset: str) -> bytes:
    return markdown.markdown(data.decode(charset)).encode(charset)


def _markdown_to_plain(data: bytes, charset: str) -> bytes:
    # Markdown source is already readable plain text.
    return data


def _html_to_plain(data: bytes, charset: str) -> bytes:
    """Strip tag-like substrings; text between tags is kept verbatim."""
    return _TAG_RE.sub("", data.decode(charset)).encode(charset)


CONVERSION_RULES: MappingProxyType[tuple[str, str], ConversionRule] = MappingProxyType(
    {
        (FragmentType.TEXT_MARKDOWN.value, FragmentType.TEXT_HTML.value): _markdown_to_html,
        (FragmentType.TEXT_MARKDOWN.value, FragmentType.TEXT_PLAIN.value): _markdown_to_plain,
        (FragmentType.TEXT_HTML.value, FragmentType.TEXT_PLAIN.value): _html_to_plain,
    }
)


class ConversionService:
    """Convert byte payloads between fragment media types."""

    def __init__(
        self,
        rules: MappingProxyType[tuple[str, str], ConversionRule] = CONVERSION_RULES,
    ) -> None:
        self.rules = rules

    def supports(self, source_type: str, target_type: str) -> bool:
        """Return whether a rule exists for the pair (identity always supported)."""
        source = MediaType.parse(source_type).base_type
        target = MediaType.parse(target_type).base_type
        return source == target or (source, target) in self.rules

    def convert(self, data: bytes, source_type: str, target_type: str) -> bytes:
        """Convert data from source_type to target_type.

        Args:
            data: Payload in source_type.
            source_type: Media type of data; a charset parameter selects the
                text decoding, otherwise UTF-8.
            target_type: Requested media type (parameters ignored).

        Returns:
            The converted payload; data itself when the base types are equal.

        Raises:
            ConversionUnsupportedException: No rule exists for the pair.
            ValidationException: Either type is malformed, or data does not
                decode in the source charset.
        """
        source = MediaType.parse(source_type)
        target = MediaType.parse(target_type)
        if source.base_type == target.base_type:
            return data
        rule = self.rules.get((source.base_type, target.base_type))
        if rule is None:
            raise ConversionUnsupportedException(source.base_type, target.base_type)
        charset = source.charset or DEFAULT_CHARSET
        try:
            return rule(data, charset)
        except (LookupError, UnicodeError) as e:
            raise ValidationException(
                f"Fragment data is not valid {charset} text", field="data"
            ) from e


_default_service = ConversionService()


def convert(data: bytes, source_type: str, target_type: str) -> bytes:
    """Convert with the default rule table. See ConversionService.convert."""
    return _default_service.convert(data, source_type, target_type)
