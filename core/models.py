"""
Configure generic models not specific
to a particular feature.
"""

from sqlmodel import SQLModel


class ErrorResponse(SQLModel):
    """Body returned for every failed request"""
    message: str
    details: str | None = None
