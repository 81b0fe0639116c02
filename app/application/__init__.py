"""Application layer: interfaces and use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (fragment stores).
"""

from app.application.interfaces import IFragmentStore
from app.application.use_cases.fragments import FragmentRepresentation, FragmentService

__all__ = [
    "FragmentRepresentation",
    "FragmentService",
    "IFragmentStore",
]
