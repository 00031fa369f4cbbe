from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    """Public projection of a user; excludes the password digest."""

    id: int
    first_name: str
    last_name: str
    email: str

    model_config = ConfigDict(from_attributes=True)
