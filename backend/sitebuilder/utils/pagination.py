# sitebuilder/utils/pagination.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Tuple, TypedDict, Type

from dateutil.parser import isoparse
from sqlalchemy.sql import or_, and_
from werkzeug.exceptions import BadRequest

MAX_LIMIT = 100


class CursorMeta(TypedDict):
    """
    Cursor pagination metadata shared by every list_* endpoint.
    """
    has_more: bool
    next_cursor: Optional[str]


def encode_cursor(sort_value: datetime, row_id: Any) -> str:
    """
    Encode a cursor from the boundary row's sort key.

    Format: ISO8601|<id>
    """
    if not isinstance(sort_value, datetime) or row_id is None:
        raise ValueError("sort value and row_id are required to encode cursor")

    return f"{sort_value.isoformat()}|{row_id}"


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    """
    Decode a cursor into (sort value, id).

    Raises:
    - BadRequest if cursor format or timestamp is invalid
    """
    if not cursor or "|" not in cursor:
        raise BadRequest("Invalid cursor format")

    try:
        ts_str, row_id = cursor.split("|", 1)
        return isoparse(ts_str), row_id
    except ValueError as exc:
        raise BadRequest("Invalid cursor format") from exc


def parse_limit(raw: Any, default: int = 20) -> int:
    try:
        limit = int(raw) if raw is not None else default
    except (TypeError, ValueError) as exc:
        raise BadRequest("Invalid limit") from exc

    if limit <= 0:
        raise BadRequest("Limit must be greater than zero")
    return min(limit, MAX_LIMIT)


def paginate_cursor(
    query,
    *,
    model: Type[Any],
    cursor: Optional[str],
    limit: int,
    sort_attr: str = "created_at",
) -> tuple[list[Any], CursorMeta]:
    """
    Execute a cursor-paginated query, newest first.

    Ordering contract:
      ORDER BY <sort_attr> DESC, id DESC

    Strategy:
    - Fetch limit + 1 rows to detect continuation
    - Trim extra row from result set
    - Generate the next cursor from the last row only
    """
    sort_column = getattr(model, sort_attr)

    if cursor:
        cursor_value, cursor_id = decode_cursor(cursor)
        query = query.filter(
            or_(
                sort_column < cursor_value,
                and_(
                    sort_column == cursor_value,
                    model.id < cursor_id,
                ),
            )
        )

    rows = (
        query.order_by(sort_column.desc(), model.id.desc())
        .limit(limit + 1)
        .all()
    )

    has_more = len(rows) > limit
    items = rows[:limit]

    next_cursor: Optional[str] = None
    if has_more and items:
        last = items[-1]
        next_cursor = encode_cursor(getattr(last, sort_attr), last.id)

    return items, {
        "has_more": has_more,
        "next_cursor": next_cursor,
    }
