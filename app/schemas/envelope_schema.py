# app/schemas/envelope_schema.py

from typing import Any, Literal, Optional
from pydantic import BaseModel


class Envelope(BaseModel):
    """Uniform result wrapper returned by the post operations."""
    status: Literal["success", "error"]
    status_code: int
    messages: str
    data: Optional[Any] = None
