"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request DTO carrying the body of one ``data-query`` block.

    The handler will convert this to internal calls to the service layer.
    """

    source: str = Field(
        ...,
        description="Block text: an @alias reference with key: value lines, or a JSON object",
        min_length=1,
    )
