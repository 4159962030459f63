from todo_api.store import TodoStore


def _add(store, title, completed=False, priority="low"):
    return store.insert(title=title, completed=completed, priority=priority, created_at="2026-01-01T00:00:00.000Z")


def test_schema_is_idempotent(settings):
    first = TodoStore(settings.db_path)
    _add(first, "kept")
    second = TodoStore(settings.db_path)
    assert second.count() == 1


def test_insert_returns_row(store):
    row = _add(store, "hello", completed=True, priority="high")
    assert row == {
        "id": row["id"],
        "title": "hello",
        "completed": 1,
        "priority": "high",
        "createdAt": "2026-01-01T00:00:00.000Z",
    }


def test_ids_are_monotonic_and_not_reused(store):
    a = _add(store, "a")
    b = _add(store, "b")
    assert b["id"] > a["id"]
    assert store.delete(b["id"]) is True
    c = _add(store, "c")
    assert c["id"] > b["id"]


def test_list_orders_newest_first(store):
    ids = [_add(store, t)["id"] for t in ("one", "two", "three")]
    assert [r["id"] for r in store.list_filtered()] == list(reversed(ids))


def test_list_filters_combine(store):
    _add(store, "search alpha", priority="high")
    beta = _add(store, "search beta", completed=True, priority="high")
    _add(store, "other", completed=True, priority="high")

    rows = store.list_filtered(search="search", completed=True, priority="high")
    assert [r["id"] for r in rows] == [beta["id"]]


def test_search_is_case_insensitive_for_ascii(store):
    # LIKE is case-insensitive for ASCII in SQLite
    row = _add(store, "Groceries")
    assert [r["id"] for r in store.list_filtered(search="groc")] == [row["id"]]


def test_unknown_or_malformed_ids(store):
    assert store.get(99999999) is None
    assert store.get("abc") is None
    assert store.get(str(2**70)) is None
    for malformed in ("1_0", "+1", " 1 ", "1\n", "\u0661", "1.0", ""):
        assert store.get(malformed) is None, malformed
    assert store.update("abc", title="x", completed=False, priority="low") is None
    assert store.delete(99999999) is False


def test_string_ids_are_accepted(store):
    row = _add(store, "by string")
    assert store.get(str(row["id"]))["title"] == "by string"


def test_numeric_lookalikes_never_touch_other_rows(store):
    rows = [_add(store, f"t{i}") for i in range(1, 11)]
    assert rows[-1]["id"] == 10
    assert store.get("1_0") is None
    assert store.update("+10", title="x", completed=True, priority="high") is None
    assert store.delete("+1_0") is False
    assert store.get(10)["title"] == "t10"
