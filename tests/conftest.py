from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todo_api.config import Settings
from todo_api.main import create_app
from todo_api.service import TodoService
from todo_api.store import TodoStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(db_path=tmp_path / "todos.db")


@pytest.fixture()
def store(settings: Settings) -> TodoStore:
    return TodoStore(settings.db_path)


@pytest.fixture()
def service(store: TodoStore) -> TodoService:
    return TodoService(store)


@pytest.fixture()
def client(settings: Settings, store: TodoStore):
    app = create_app(settings, store=store)
    with TestClient(app) as c:
        yield c
