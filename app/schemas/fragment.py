"""Fragment API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class FragmentMetadata(BaseModel):
    """Fragment metadata as stored: {id, ownerId, created, updated, type, size}."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    owner_id: str = Field(alias="ownerId")
    created: str
    updated: str
    type: str
    size: int = Field(ge=0)


class FragmentResponse(BaseModel):
    """Response for POST /fragments and GET /fragments/{id}/info."""

    status: str = "ok"
    fragment: FragmentMetadata


class FragmentListResponse(BaseModel):
    """Response for GET /fragments: ids, or metadata when expand=1."""

    status: str = "ok"
    fragments: list[str] | list[FragmentMetadata]


class StatusResponse(BaseModel):
    """Response for DELETE /fragments/{id}."""

    status: str = "ok"
