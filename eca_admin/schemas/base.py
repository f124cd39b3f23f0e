"""
Base schemas shared by every Pydantic model of the API
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Any

# largest value of a signed 64-bit integer column (SQLite INTEGER, PostgreSQL BIGINT)
MAX_ID = 2**63 - 1

RecordId = Annotated[int, Field(gt=0, le=MAX_ID)]


class BaseSchema(BaseModel):
    """
    Base schema: camelCase names on the wire, ORM objects accepted as input,
    and surrounding whitespace stripped from every string of the incoming
    payload before validation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    @model_validator(mode="before")
    @classmethod
    def strip_all_strings(cls, data: Any) -> Any:
        if isinstance(data, dict):
            new_data = {}
            for k, v in data.items():
                if isinstance(v, str):
                    new_data[k] = v.strip()
                else:
                    new_data[k] = v
            return new_data
        return data
