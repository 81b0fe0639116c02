"""Application use cases: one entry point per workflow."""

from app.application.use_cases.fragments import FragmentRepresentation, FragmentService

__all__ = [
    "FragmentRepresentation",
    "FragmentService",
]
