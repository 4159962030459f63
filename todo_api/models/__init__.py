from todo_api.models.ErrorResponse import ErrorDetail, ErrorResponse
from todo_api.models.TodoCreate import TodoCreate
from todo_api.models.TodoResponse import TodoResponse
from todo_api.models.TodoUpdate import TodoUpdate

__all__ = ["ErrorDetail", "ErrorResponse", "TodoCreate", "TodoResponse", "TodoUpdate"]
