"""
Schema pieces shared by several endpoints.
"""

import math
from datetime import datetime, timezone

from pydantic import BaseModel


def to_naive_utc(value: datetime | None) -> datetime | None:
    """
    Convert an aware datetime to naive UTC.

    Timestamps are stored without a zone (UTC by convention),
    so anything a client sends with an offset is shifted to
    UTC before it is compared or stored.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )
