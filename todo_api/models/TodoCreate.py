from typing import Any
from pydantic import BaseModel


class TodoCreate(BaseModel):
    # loosely typed; todo_api.validation does the checking
    title: Any = None
    completed: Any = False
    priority: Any = None
