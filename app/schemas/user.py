# app/schemas/user.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class UserCredentials(BaseModel):
    """Body of /register and /login."""
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: int
    username: str
    is_bouncer: bool
    bar_id: Optional[int]

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
