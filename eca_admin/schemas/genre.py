from pydantic import Field

from eca_admin.schemas.base import BaseSchema


class GenreIn(BaseSchema):
    """Genre payload for create and update; ``name`` is checked by the validation layer"""

    name: str | None = Field(None, max_length=150)
    description: str | None = Field(None, max_length=1000)


class GenreOut(BaseSchema):
    id: int
    name: str
    description: str | None = None
