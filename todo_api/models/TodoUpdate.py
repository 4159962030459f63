from typing import Any, Dict
from pydantic import BaseModel


class TodoUpdate(BaseModel):
    title: Any = None
    completed: Any = None
    priority: Any = None

    def patch(self) -> Dict[str, Any]:
        """Only the fields the client actually sent, explicit nulls included."""
        return {name: getattr(self, name) for name in self.model_fields_set}
