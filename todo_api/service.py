import functools
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from todo_api.errors import InternalError, NotFound
from todo_api.models import TodoResponse
from todo_api.store import TodoStore
from todo_api.validation import (
    normalize_completed,
    normalize_query,
    validate_priority,
    validate_priority_filter,
    validate_status_filter,
    validate_title,
)

logger = logging.getLogger(__name__)

_STATUS_TO_COMPLETED = {"all": None, "completed": True, "pending": False}


def _now_iso() -> str:
    # same shape as JavaScript's Date.toISOString(): millisecond precision, Z suffix
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def _storage_boundary(func):
    """Turn storage failures into InternalError, logging the real cause."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except sqlite3.Error as exc:
            logger.exception("storage failure in %s", func.__name__)
            raise InternalError() from exc

    return wrapper


class TodoService:
    """Todo operations over an injected store."""

    def __init__(self, store: TodoStore):
        self.store = store

    @_storage_boundary
    def create(self, title: Any, completed: Any = False, priority: Any = None) -> TodoResponse:
        clean_title = validate_title(title)
        clean_priority = validate_priority(priority)
        row = self.store.insert(
            title=clean_title,
            completed=normalize_completed(completed),
            priority=clean_priority,
            created_at=_now_iso(),
        )
        logger.debug("created todo id=%s", row["id"])
        return TodoResponse.from_row(row)

    @_storage_boundary
    def list(self, q: Any = "", status: Any = "all", priority: Any = "") -> List[TodoResponse]:
        status = validate_status_filter(status)
        priority_filter = validate_priority_filter(priority)
        query = normalize_query(q)

        rows = self.store.list_filtered(
            search=query,
            completed=_STATUS_TO_COMPLETED[status],
            priority=priority_filter,
        )
        if not rows:
            logger.info("SEARCH_EMPTY q=%r status=%s priority=%s", query, status, priority_filter or "")
        return [TodoResponse.from_row(r) for r in rows]

    @_storage_boundary
    def get(self, todo_id: Any) -> TodoResponse:
        row = self.store.get(todo_id)
        if row is None:
            raise NotFound()
        return TodoResponse.from_row(row)

    @_storage_boundary
    def update(self, todo_id: Any, patch: Optional[Dict[str, Any]] = None) -> TodoResponse:
        existing = self.store.get(todo_id)
        if existing is None:
            raise NotFound()

        merged = {
            "title": existing["title"],
            "completed": bool(existing["completed"]),
            "priority": existing["priority"],
        }
        merged.update({k: v for k, v in (patch or {}).items() if k in merged})

        clean_title = validate_title(merged["title"])
        clean_priority = validate_priority(merged["priority"])
        row = self.store.update(
            todo_id,
            title=clean_title,
            completed=normalize_completed(merged["completed"]),
            priority=clean_priority,
        )
        if row is None:
            # deleted between the read and the write
            raise NotFound()
        return TodoResponse.from_row(row)

    @_storage_boundary
    def delete(self, todo_id: Any) -> None:
        if not self.store.delete(todo_id):
            raise NotFound()
