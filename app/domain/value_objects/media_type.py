"""MediaType value object: a parsed Content-Type value.

Grammar follows RFC 7231 section 3.1.1.1: ``type "/" subtype *( OWS ";" OWS
parameter )`` where parameter values are tokens or quoted strings. Type,
subtype and parameter names are case-insensitive and normalized to lower case.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from app.domain.exceptions import ValidationException

_TOKEN = r"[!#$%&'*+.^_`|~0-9A-Za-z-]+"
_TYPE_RE = re.compile(rf"^\s*({_TOKEN})/({_TOKEN})\s*")
_PARAM_RE = re.compile(
    rf'\s*;\s*({_TOKEN})=({_TOKEN}|"(?:[^"\\]|\\.)*")\s*'
)
_QUOTED_PAIR_RE = re.compile(r"\\(.)")
_TOKEN_VALUE_RE = re.compile(_TOKEN)


@dataclass(frozen=True)
class MediaType:
    """Immutable media type: base type plus parameters (e.g. charset).

    Construct with MediaType.parse(raw); raw strings that do not match the
    Content-Type grammar raise ValidationException.
    """

    type: str
    subtype: str
    parameters: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @classmethod
    def parse(cls, raw: str) -> "MediaType":
        """Parse a Content-Type style string.

        Args:
            raw: Value such as 'text/plain' or 'text/html; charset=utf-8'.

        Returns:
            MediaType with lower-cased type, subtype and parameter names.

        Raises:
            ValidationException: If raw is not a string or is malformed.
        """
        if not isinstance(raw, str):
            raise ValidationException("Media type must be a string", field="type")
        match = _TYPE_RE.match(raw)
        if not match:
            raise ValidationException(f"Invalid media type: {raw!r}", field="type")
        params: dict[str, str] = {}
        pos = match.end()
        while pos < len(raw):
            param = _PARAM_RE.match(raw, pos)
            if not param:
                raise ValidationException(f"Invalid media type parameters: {raw!r}", field="type")
            name, value = param.group(1).lower(), param.group(2)
            if value.startswith('"'):
                value = _QUOTED_PAIR_RE.sub(r"\1", value[1:-1])
            params[name] = value
            pos = param.end()
        return cls(match.group(1).lower(), match.group(2).lower(), params)

    @property
    def base_type(self) -> str:
        """Type/subtype without parameters (e.g. 'text/html')."""
        return f"{self.type}/{self.subtype}"

    @property
    def charset(self) -> str | None:
        return self.parameters.get("charset")

    def __str__(self) -> str:
        params = "".join(f"; {k}={_format_value(v)}" for k, v in self.parameters.items())
        return f"{self.base_type}{params}"


def _format_value(value: str) -> str:
    """Render a parameter value as a token, or as a quoted string when it is not one."""
    if _TOKEN_VALUE_RE.fullmatch(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
