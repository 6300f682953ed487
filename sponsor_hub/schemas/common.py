# sponsor_hub/schemas/common.py
from datetime import datetime, timezone
from typing import Annotated
from fastapi import Path
from pydantic import BaseModel, PlainSerializer


def _to_posix(value: datetime | None) -> int:
    if value is None:
        return 0
    if value.tzinfo is None:
        # the database hands back naive UTC
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


# datetimes leave the API as POSIX seconds; unset is 0
PosixDateTime = Annotated[
    datetime | None,
    PlainSerializer(_to_posix, return_type=int, when_used="json"),
]


class ActionResponse(BaseModel):
    """Reply for create/update/delete calls."""
    status: int
    message: str
    resource_id: int


# Largest id a 64-bit INTEGER column holds
MAX_ROW_ID = 2**63 - 1

# Path ids; anything out of range is a 400 before it reaches the driver
RowId = Annotated[int, Path(ge=0, le=MAX_ROW_ID)]
