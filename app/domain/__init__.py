"""Domain layer: entities, value objects, type registry, conversion, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import Fragment
from app.domain.enums import FragmentType, StorageBackend
from app.domain.exceptions import (
    AuthenticationException,
    ConversionUnsupportedException,
    FragmentsException,
    ResourceNotFoundException,
    UnsupportedTypeException,
    ValidationException,
)
from app.domain.value_objects import FragmentRecord, MediaType

__all__ = [
    # Entities
    "Fragment",
    # Enums
    "FragmentType",
    "StorageBackend",
    # Exceptions
    "AuthenticationException",
    "ConversionUnsupportedException",
    "FragmentsException",
    "ResourceNotFoundException",
    "UnsupportedTypeException",
    "ValidationException",
    # Value objects
    "FragmentRecord",
    "MediaType",
]
