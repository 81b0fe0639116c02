"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the owner identity and the fragment use
cases. The fragment store is built once per app (see app.core.lifespan)
and shared by every request; routes depend only on these dependencies,
not on infrastructure directly.
"""

from __future__ import annotations

import hashlib
from typing import Annotated

from fastapi import Depends, Request

from app.application.interfaces.storage import IFragmentStore
from app.application.use_cases.fragments import FragmentService
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.external.storage import StorageFactory


def hash_owner(principal: str) -> str:
    """Return the owner id for an authenticated principal (SHA-256 hex digest).

    Owner ids never carry the principal itself (e.g. an email address).
    """
    return hashlib.sha256(principal.strip().encode("utf-8")).hexdigest()


def get_owner_id(request: Request) -> str:
    """Resolve the owner id from the header set by the upstream auth layer.

    Raises:
        AuthenticationException: Header missing or blank.
    """
    name = get_settings().owner_header_name
    principal = request.headers.get(name)
    if not principal or not principal.strip():
        raise AuthenticationException(f"Authentication required: missing {name} header")
    return hash_owner(principal)


def get_fragment_store(request: Request) -> IFragmentStore:
    """Return the app-wide fragment store, creating it on first use."""
    store = getattr(request.app.state, "fragment_store", None)
    if store is None:
        store = StorageFactory.create_fragment_store()
        request.app.state.fragment_store = store
    return store


def get_fragment_service(
    store: Annotated[IFragmentStore, Depends(get_fragment_store)],
) -> FragmentService:
    """Build FragmentService over the shared store."""
    return FragmentService(store)
