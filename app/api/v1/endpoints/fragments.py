"""Fragment API: thin routes delegating to FragmentService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import get_fragment_service, get_owner_id
from app.application.use_cases.fragments import FragmentService
from app.core.config import get_settings
from app.domain.entities.fragment import Fragment
from app.domain.exceptions import UnsupportedTypeException, ValidationException
from app.domain.value_objects.media_type import MediaType
from app.schemas.fragment import (
    FragmentListResponse,
    FragmentMetadata,
    FragmentResponse,
    StatusResponse,
)
from app.shared.telemetry import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _with_charset(media_type: str) -> str:
    """Append charset=utf-8 to text and JSON types that do not declare a charset."""
    parsed = MediaType.parse(media_type)
    needs_charset = parsed.type == "text" or parsed.base_type == "application/json"
    if needs_charset and parsed.charset is None:
        return f"{media_type}; charset=utf-8"
    return media_type


def _location(request: Request, fragment_id: str) -> str:
    base = get_settings().api_url or str(request.base_url)
    return f"{base.rstrip('/')}/v1/fragments/{fragment_id}"


def _metadata(fragment: Fragment) -> FragmentMetadata:
    return FragmentMetadata.model_validate(fragment.to_dict())


@router.post("", response_model=FragmentResponse, status_code=201)
async def create_fragment(
    request: Request,
    response: Response,
    owner_id: Annotated[str, Depends(get_owner_id)],
    service: Annotated[FragmentService, Depends(get_fragment_service)],
):
    """Create a fragment from the raw request body; Content-Type sets its type."""
    content_type = request.headers.get("content-type")
    if not content_type:
        raise ValidationException("Content-Type header is required", field="content-type")
    media_type = MediaType.parse(content_type)
    if not Fragment.is_supported_type(content_type):
        raise UnsupportedTypeException(media_type.base_type)
    body = await request.body()
    fragment = await service.create_fragment(owner_id, str(media_type), body)
    response.headers["Location"] = _location(request, fragment.id)
    return FragmentResponse(fragment=_metadata(fragment))


@router.get("", response_model=FragmentListResponse)
async def list_fragments(
    owner_id: Annotated[str, Depends(get_owner_id)],
    service: Annotated[FragmentService, Depends(get_fragment_service)],
    expand: str | None = Query(None, description="1 returns full metadata instead of ids"),
):
    """List the caller's fragments: ids, or metadata when expand=1 (any other value means ids)."""
    expanded = expand == "1"
    fragments = await service.list_fragments(owner_id, expanded)
    if expanded:
        return FragmentListResponse(fragments=[_metadata(f) for f in fragments])
    return FragmentListResponse(fragments=fragments)


@router.get("/{fragment_id}/info", response_model=FragmentResponse)
async def get_fragment_info(
    fragment_id: str,
    owner_id: Annotated[str, Depends(get_owner_id)],
    service: Annotated[FragmentService, Depends(get_fragment_service)],
):
    """Return fragment metadata without its data."""
    fragment = await service.get_fragment(owner_id, fragment_id)
    return FragmentResponse(fragment=_metadata(fragment))


@router.get(
    "/{fragment_ref}",
    response_class=Response,
    responses={200: {"description": "Fragment data, converted when the id carries an extension"}},
)
async def get_fragment(
    fragment_ref: str,
    owner_id: Annotated[str, Depends(get_owner_id)],
    service: Annotated[FragmentService, Depends(get_fragment_service)],
) -> Response:
    """Return fragment data as stored, or converted for GET /fragments/{id}.{ext}."""
    if "." in fragment_ref:
        fragment_id, ext = fragment_ref.rsplit(".", 1)
        logger.debug("Converting fragment %s to .%s", fragment_id, ext)
        representation = await service.get_converted_data(owner_id, fragment_id, ext)
        return Response(
            content=representation.data,
            media_type=_with_charset(representation.media_type),
        )
    fragment, data = await service.get_fragment_data(owner_id, fragment_ref)
    return Response(content=data, media_type=_with_charset(fragment.type))


@router.delete("/{fragment_id}", response_model=StatusResponse)
async def delete_fragment(
    fragment_id: str,
    owner_id: Annotated[str, Depends(get_owner_id)],
    service: Annotated[FragmentService, Depends(get_fragment_service)],
):
    """Delete a fragment's metadata and data."""
    await service.delete_fragment(owner_id, fragment_id)
    return StatusResponse()
