import httpx
import pytest

from todo_api.client import ApiError, TodoClient, order_todos


@pytest.fixture()
def api(client):
    return TodoClient(http=client)


def test_crud_through_client(api):
    created = api.create_todo({"title": "via client", "priority": "high"})
    assert api.get_todo(created["id"]) == created

    updated = api.update_todo(created["id"], {"completed": True})
    assert updated["completed"] is True

    assert api.delete_todo(created["id"]) is None
    with pytest.raises(ApiError) as info:
        api.get_todo(created["id"])
    assert info.value.status == 404
    assert info.value.message == "Todo not found"


def test_list_omits_default_params(api, client):
    api.create_todo({"title": "one"})
    sent = []
    client.event_hooks["request"].append(lambda request: sent.append(request.url))

    api.list_todos()
    api.list_todos(q="one", status="pending", priority="low")

    assert sent[0].query == b""
    assert sent[1].params["q"] == "one"
    assert sent[1].params["status"] == "pending"
    assert sent[1].params["priority"] == "low"


def test_validation_error_carries_field(api):
    with pytest.raises(ApiError) as info:
        api.create_todo({"title": ""})
    assert info.value.status == 400
    assert info.value.field == "title"
    assert info.value.message == "Title is required"


def test_network_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://todo.invalid", transport=httpx.MockTransport(refuse))
    with pytest.raises(ApiError) as info:
        TodoClient(http=http).list_todos()
    assert info.value.message == "Network error. Please check your connection."
    assert isinstance(info.value.__cause__, httpx.ConnectError)


def test_non_json_error_falls_back_to_text():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    http = httpx.Client(base_url="http://todo.invalid", transport=httpx.MockTransport(handler))
    with pytest.raises(ApiError) as info:
        TodoClient(http=http).get_todo(1)
    assert info.value.status == 502
    assert info.value.message == "Bad Gateway"


def test_order_todos_incomplete_first_then_newest():
    todos = [
        {"id": 1, "completed": False, "createdAt": "2026-01-01T00:00:00.000Z"},
        {"id": 2, "completed": True, "createdAt": "2026-03-01T00:00:00.000Z"},
        {"id": 3, "completed": False, "createdAt": "2026-02-01T00:00:00.000Z"},
        {"id": 4, "completed": False, "createdAt": "not a date"},
    ]
    ordered = order_todos(todos)
    assert [t["id"] for t in ordered] == [3, 1, 4, 2]
    assert [t["id"] for t in todos] == [1, 2, 3, 4]
    assert order_todos(None) == []
