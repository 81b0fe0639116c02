"""Fragment use cases."""

from app.application.use_cases.fragments.fragment_operations import (
    FragmentRepresentation,
    FragmentService,
)

__all__ = [
    "FragmentRepresentation",
    "FragmentService",
]
