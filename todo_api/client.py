"""HTTP client for the todo API, plus the ordering the UI applies to lists."""

import os
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import httpx

DEFAULT_BASE = os.getenv("TODO_API_BASE", "http://localhost:4000")


class ApiError(Exception):
    def __init__(self, message: str, status: Optional[int] = None, field: Optional[str] = None, raw: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.field = field
        self.raw = raw


def _parse_response(response: httpx.Response) -> Any:
    if response.status_code == 204:
        return None
    if "application/json" in response.headers.get("content-type", ""):
        try:
            return response.json()
        except ValueError:
            return None
    return response.text or None


def _error_message(data: Any) -> str:
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if data.get("message"):
            return data["message"]
    if isinstance(data, str) and data:
        return data
    return "Request failed"


class TodoClient:
    def __init__(self, base_url: str = DEFAULT_BASE, http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "TodoClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, *, json: Any = None, params: Optional[Dict[str, str]] = None) -> Any:
        try:
            response = self._http.request(method, path, json=json, params=params)
        except httpx.TransportError as exc:
            raise ApiError("Network error. Please check your connection.") from exc

        data = _parse_response(response)
        if response.is_error:
            field = None
            if isinstance(data, dict) and isinstance(data.get("error"), dict):
                field = data["error"].get("field")
            raise ApiError(_error_message(data), status=response.status_code, field=field, raw=data)
        return data

    def list_todos(self, q: Optional[str] = None, status: str = "all", priority: Optional[str] = None) -> List[Dict[str, Any]]:
        # defaults are left out to keep URLs tidy
        params = {}
        if q:
            params["q"] = q
        if status and status != "all":
            params["status"] = status
        if priority:
            params["priority"] = priority
        return self._request("GET", "/todos", params=params or None)

    def get_todo(self, todo_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/todos/{todo_id}")

    def create_todo(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/todos", json=data)

    def update_todo(self, todo_id: int, patch: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/todos/{todo_id}", json=patch)

    def delete_todo(self, todo_id: int) -> None:
        return self._request("DELETE", f"/todos/{todo_id}")


def _created_ts(todo: Dict[str, Any]) -> float:
    raw = todo.get("createdAt")
    if not raw:
        return 0.0
    try:
        return datetime.fromisoformat(str(raw).replace("Z", "+00:00")).timestamp()
    except ValueError:
        return 0.0


def order_todos(todos: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Incomplete first, then newest first. Returns a new list."""
    return sorted(todos or [], key=lambda t: (bool(t.get("completed")), -_created_ts(t)))
