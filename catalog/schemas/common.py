"""Common schemas used across multiple endpoints."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanging camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(CamelModel):
    """Uniform response wrapper: success flag plus data or error."""
    success: bool = True


class ErrorResponse(Envelope):
    """Response model for errors."""
    success: bool = False
    error: str
