from typing import Annotated
from fastapi import Path, Query

from eca_admin.schemas.base import MAX_ID

MAX_PAGE = 100_000

PathId = Annotated[int, Path(gt=0, le=MAX_ID)]
QueryId = Annotated[int, Query(gt=0, le=MAX_ID)]
PageNumber = Annotated[int, Query(ge=1, le=MAX_PAGE)]
