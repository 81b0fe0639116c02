"""Fragment metadata record: the persisted shape, independent of any store backend."""

from dataclasses import dataclass
from typing import Any

from app.domain.exceptions import ValidationException


@dataclass(frozen=True)
class FragmentRecord:
    """Persisted fragment metadata: {id, ownerId, created, updated, type, size}.

    All fields are plain scalars; created and updated are ISO-8601 strings.
    """

    id: str
    owner_id: str
    created: str
    updated: str
    type: str
    size: int

    def to_dict(self) -> dict[str, Any]:
        """Return the stored shape (camelCase ownerId)."""
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "created": self.created,
            "updated": self.updated,
            "type": self.type,
            "size": self.size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FragmentRecord":
        """Build from the stored shape. Raises ValidationException if a field is missing."""
        try:
            return cls(
                id=data["id"],
                owner_id=data["ownerId"],
                created=data["created"],
                updated=data["updated"],
                type=data["type"],
                size=data["size"],
            )
        except KeyError as e:
            raise ValidationException(
                f"Fragment record is missing {e.args[0]}", field=str(e.args[0])
            ) from e
