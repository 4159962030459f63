import contextlib
import logging
import re
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS todos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    completed INTEGER NOT NULL DEFAULT 0,
    priority TEXT NOT NULL DEFAULT 'low',
    createdAt TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_todos_priority ON todos(priority);
CREATE INDEX IF NOT EXISTS idx_todos_completed ON todos(completed);
"""

_COLUMNS = "id, title, completed, priority, createdAt"

# SQLite INTEGER is a signed 64-bit value
_MAX_ROWID = 2**63 - 1
_ID_PATTERN = re.compile(r"-?[0-9]+")


class TodoStore:
    """
    SQLite todo store.

    Every method opens its own connection, commits and closes it, so one
    store may be shared by the request threadpool. The schema is applied
    on construction and is safe to re-apply on every startup.
    """

    def __init__(self, db_path: Union[str, Path] = "todos.db") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TodoStore ready db=%s total=%s", self._db_path, self.count())

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @contextlib.contextmanager
    def _connection(self):
        conn = self._get_conn()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            conn.executescript(SCHEMA)

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
        return dict(row)

    @staticmethod
    def _valid_id(todo_id: Any) -> Optional[int]:
        if isinstance(todo_id, bool):
            return None
        if isinstance(todo_id, int):
            value = todo_id
        elif isinstance(todo_id, str) and _ID_PATTERN.fullmatch(todo_id):
            value = int(todo_id)
        else:
            return None
        if not -_MAX_ROWID - 1 <= value <= _MAX_ROWID:
            return None
        return value

    # ---- CRUD ----

    def insert(self, *, title: str, completed: bool, priority: str, created_at: str) -> Dict[str, Any]:
        with self._connection() as conn:
            cur = conn.execute(
                "INSERT INTO todos (title, completed, priority, createdAt) VALUES (?, ?, ?, ?)",
                (title, 1 if completed else 0, priority, created_at),
            )
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM todos WHERE id = ?", (cur.lastrowid,)
            ).fetchone()
        return self._row_to_dict(row)

    def get(self, todo_id: Any) -> Optional[Dict[str, Any]]:
        rowid = self._valid_id(todo_id)
        if rowid is None:
            return None
        with self._connection() as conn:
            row = conn.execute(f"SELECT {_COLUMNS} FROM todos WHERE id = ?", (rowid,)).fetchone()
        return self._row_to_dict(row) if row else None

    def update(self, todo_id: Any, *, title: str, completed: bool, priority: str) -> Optional[Dict[str, Any]]:
        rowid = self._valid_id(todo_id)
        if rowid is None:
            return None
        with self._connection() as conn:
            cur = conn.execute(
                "UPDATE todos SET title = ?, completed = ?, priority = ? WHERE id = ?",
                (title, 1 if completed else 0, priority, rowid),
            )
            if cur.rowcount == 0:
                return None
            row = conn.execute(f"SELECT {_COLUMNS} FROM todos WHERE id = ?", (rowid,)).fetchone()
        return self._row_to_dict(row)

    def delete(self, todo_id: Any) -> bool:
        rowid = self._valid_id(todo_id)
        if rowid is None:
            return False
        with self._connection() as conn:
            cur = conn.execute("DELETE FROM todos WHERE id = ?", (rowid,))
        return cur.rowcount > 0

    # ---- listings ----

    def list_filtered(
        self,
        *,
        search: str = "",
        completed: Optional[bool] = None,
        priority: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        where, params = [], []
        if search:
            where.append("title LIKE ?")
            params.append(f"%{search}%")
        if completed is not None:
            where.append("completed = ?")
            params.append(1 if completed else 0)
        if priority:
            where.append("priority = ?")
            params.append(priority)

        sql = f"SELECT {_COLUMNS} FROM todos"
        if where:
            sql += f" WHERE {' AND '.join(where)}"
        sql += " ORDER BY id DESC"

        with self._connection() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [self._row_to_dict(r) for r in rows]

    def count(self) -> int:
        with self._connection() as conn:
            row = conn.execute("SELECT COUNT(1) FROM todos").fetchone()
        return int(row[0]) if row and row[0] is not None else 0
