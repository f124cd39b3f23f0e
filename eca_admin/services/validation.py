from typing import Any, Iterable

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eca_admin.core.exceptions import RelatedRecordMissing, ValidationError
from eca_admin.schemas.base import MAX_ID


def require_fields(data: BaseModel | dict, *fields: tuple[str, str]) -> None:
    """
    Check that every required field is present.

    :param fields: pairs of (attribute name, label used in the message)
    :raises ValidationError: for the first missing field, e.g. "readerId is required"
    """
    for name, label in fields:
        value = data.get(name) if isinstance(data, dict) else getattr(data, name, None)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{label} is required")


def _whole_number(item: Any) -> int | None:
    # 3, 3.0 and "3" are ids; 1.7, "1.7", True and "" are not
    if isinstance(item, bool):
        return None
    if isinstance(item, int):
        return item
    if isinstance(item, float):
        return int(item) if item.is_integer() else None
    if isinstance(item, str):
        text = item.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    return None


def parse_id_list(value: Any, label: str) -> list[int]:
    """
    Turn a list of ids (whole numbers or digit strings) into a list of distinct
    ints, keeping the caller's order.
    """
    if value is None or not isinstance(value, list):
        raise ValidationError(f"{label} must be an array")
    ids: list[int] = []
    for item in value:
        parsed = _whole_number(item)
        if parsed is None:
            raise ValidationError(f"{label} must contain numeric ids")
        if parsed <= 0:
            raise ValidationError(f"{label} must contain positive ids")
        if parsed > MAX_ID:
            raise ValidationError(f"{label} contains an id out of range")
        if parsed not in ids:
            ids.append(parsed)
    return ids


async def ensure_exists(db: AsyncSession, model, obj_id: int, label: str):
    """
    Load a row by primary key or raise RelatedRecordMissing.
    Used for every foreign-key-like input before a write.
    """
    obj = await db.get(model, obj_id)
    if obj is None:
        raise RelatedRecordMissing(f"{label} {obj_id} not found")
    return obj


async def ensure_all_exist(
    db: AsyncSession, model, ids: Iterable[int], label: str
) -> None:
    ids = list(ids)
    if not ids:
        return
    found = set(await db.scalars(select(model.id).where(model.id.in_(ids))))
    missing = [i for i in ids if i not in found]
    if missing:
        raise RelatedRecordMissing(
            f"{label} not found: {', '.join(str(i) for i in missing)}"
        )
