"""Tests for the conversion engine."""

import pytest

from app.domain import type_registry
from app.domain.conversion import CONVERSION_RULES, ConversionService, convert
from app.domain.exceptions import ConversionUnsupportedException, ValidationException

# Declared reachable in the capability matrix but with no conversion rule.
KNOWN_GAPS = {
    ("text/csv", "text/plain"),
    ("text/csv", "application/json"),
    ("application/json", "text/plain"),
}


class TestIdentity:
    @pytest.mark.parametrize("media_type", sorted(type_registry.SUPPORTED_TYPES))
    def test_same_type_returns_input_object(self, media_type: str) -> None:
        data = b"anything \xff at all"
        assert convert(data, media_type, media_type) is data

    def test_parameters_do_not_break_identity(self) -> None:
        data = b"hello"
        assert convert(data, "text/plain; charset=utf-8", "text/plain") is data


class TestRules:
    def test_markdown_to_html(self) -> None:
        out = convert(b"# Heading\n\n**bold**", "text/markdown", "text/html")
        assert b"<h1>Heading</h1>" in out
        assert b"<strong>bold</strong>" in out

    def test_markdown_to_plain_is_unchanged(self) -> None:
        data = b"# Heading\n\n**bold**"
        assert convert(data, "text/markdown", "text/plain") == data

    def test_html_to_plain_strips_tags(self) -> None:
        assert convert(b"<h1>x</h1>", "text/html", "text/plain") == b"x"

    def test_html_to_plain_drops_attributes_keeps_text(self) -> None:
        html = b'<p class="a">Hello, <a href="/x">world</a>!</p>\n<br/>'
        assert convert(html, "text/html", "text/plain") == b"Hello, world!\n"

    def test_html_to_plain_keeps_entities_outside_tags(self) -> None:
        assert convert(b"<b>a &amp; b</b>", "text/html", "text/plain") == b"a &amp; b"

    def test_source_charset_is_used(self) -> None:
        data = "<p>café</p>".encode("latin-1")
        out = convert(data, "text/html; charset=latin-1", "text/plain")
        assert out == "café".encode("latin-1")

    def test_undecodable_data_is_validation_error(self) -> None:
        with pytest.raises(ValidationException):
            convert(b"\xff\xfe<b>", "text/html", "text/plain")

    def test_is_deterministic(self) -> None:
        data = b"- a\n- b\n"
        assert convert(data, "text/markdown", "text/html") == convert(
            data, "text/markdown", "text/html"
        )


class TestUnsupported:
    def test_plain_to_html_names_both_types(self) -> None:
        with pytest.raises(ConversionUnsupportedException) as exc_info:
            convert(b"hi", "text/plain", "text/html")
        assert exc_info.value.details == {"source_type": "text/plain", "target_type": "text/html"}

    def test_unknown_pair(self) -> None:
        with pytest.raises(ConversionUnsupportedException):
            convert(b"{}", "application/json", "text/csv")

    def test_malformed_type_is_validation_error(self) -> None:
        with pytest.raises(ValidationException):
            convert(b"x", "not a type", "text/plain")


class TestCapabilityCoverage:
    """Every capability matrix entry has a rule, or is a known gap."""

    def _matrix_pairs(self) -> set[tuple[str, str]]:
        return {
            (source, target)
            for source, targets in type_registry.CONVERSIONS.items()
            for target in targets
            if source != target
        }

    def test_gaps_are_exactly_the_known_gaps(self) -> None:
        service = ConversionService()
        missing = {pair for pair in self._matrix_pairs() if not service.supports(*pair)}
        assert missing == KNOWN_GAPS

    def test_every_rule_is_declared_in_the_matrix(self) -> None:
        assert set(CONVERSION_RULES) <= self._matrix_pairs()

    @pytest.mark.parametrize("pair", sorted(KNOWN_GAPS))
    def test_known_gaps_raise(self, pair: tuple[str, str]) -> None:
        with pytest.raises(ConversionUnsupportedException):
            convert(b"a,b\n1,2\n", *pair)

    def test_custom_rule_table(self) -> None:
        service = ConversionService(
            rules={("text/csv", "text/plain"): lambda data, charset: data.upper()}
        )
        assert service.convert(b"a,b", "text/csv", "text/plain") == b"A,B"
