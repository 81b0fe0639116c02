"""Application interfaces (ports): fragment store protocol.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.storage import IFragmentStore

__all__ = ["IFragmentStore"]
