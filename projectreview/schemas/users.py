"""User schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Authenticated user held by the session."""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, frozen=True)

    id: str
    username: str
    department: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
