from typing import Any, Dict
from pydantic import BaseModel, ConfigDict

from todo_api.validation import Priority


class TodoResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    completed: bool
    priority: Priority
    createdAt: str

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "TodoResponse":
        return cls(
            id=row["id"],
            title=row["title"],
            completed=bool(row["completed"]),
            priority=row["priority"],
            createdAt=row["createdAt"],
        )
