"""Domain entities and aggregates."""

from app.domain.entities.fragment import Fragment

__all__ = ["Fragment"]
