"""Input validation and normalization for todo fields and list filters.

Every validator either returns the normalized value or raises InvalidInput
carrying the field name and the client-facing message.
"""
import re
from typing import Any, Literal, Optional

from todo_api.errors import InvalidInput

Priority = Literal["low", "medium", "high"]

PRIORITIES = ("low", "medium", "high")
STATUSES = ("all", "completed", "pending")
DEFAULT_PRIORITY = "low"
MAX_TITLE_LENGTH = 200
MAX_QUERY_LENGTH = 200

# whitespace plus the byte-order mark, which str.strip() keeps
_EDGE_SPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _utf16_length(text: str) -> int:
    # clients count titles in UTF-16 code units
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def validate_title(raw: Any) -> str:
    title = _EDGE_SPACE.sub("", _as_text(raw))
    if not title:
        raise InvalidInput("title", "Title is required")
    if _utf16_length(title) > MAX_TITLE_LENGTH:
        raise InvalidInput("title", f"Title is too long (max {MAX_TITLE_LENGTH})")
    return title


def normalize_completed(raw: Any) -> bool:
    # anything unrecognized counts as not completed
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw == 1
    if isinstance(raw, str):
        return raw in ("1", "true")
    return False


def validate_priority(raw: Any) -> str:
    if raw is None or raw == "":
        return DEFAULT_PRIORITY
    priority = _as_text(raw)
    if priority not in PRIORITIES:
        raise InvalidInput("priority", "Invalid priority")
    return priority


def validate_status_filter(raw: Any) -> str:
    status = _as_text(raw)
    if status not in STATUSES:
        raise InvalidInput("status", "Invalid status (all|completed|pending)")
    return status


def validate_priority_filter(raw: Any) -> Optional[str]:
    if raw is None or raw == "":
        return None
    priority = _as_text(raw)
    if priority not in PRIORITIES:
        raise InvalidInput("priority", "Invalid priority")
    return priority


def normalize_query(raw: Any) -> str:
    return _as_text(raw)[:MAX_QUERY_LENGTH]
