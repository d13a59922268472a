from __future__ import annotations

import logging
from unittest.mock import patch

from imageboard.errors import DataAccessError


def _seed_board(seed, name="a", bump_limit=300, category=None):
    if category:
        seed.category(category)
    seed.board(name, f"/{name}/", category, bump_limit=bump_limit)


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "imageboard-api"


def test_categories_and_boards(client, seed):
    _seed_board(seed, "g", category="Technology")
    _seed_board(seed, "a", category="Creative")
    _seed_board(seed, "meta")

    cats = client.get("/api/categories").json()
    assert cats == [{"name": "Creative"}, {"name": "Technology"}]

    boards = client.get("/api/boards").json()
    assert [b["name"] for b in boards] == ["a", "g", "meta"]
    assert boards[2] == {"name": "meta", "description": "/meta/", "category": None}
    assert "bump_limit" not in boards[0]

    tech = client.get("/api/boards", params={"category": "Technology"}).json()
    assert [b["name"] for b in tech] == ["g"]
    assert client.get("/api/boards", params={"category": "Nope"}).json() == []


def test_unknown_board_is_404(client):
    r = client.get("/api/boards/nonexistent")
    assert r.status_code == 404
    assert "board_not_found" in r.json()["detail"]


def test_thread_lifecycle(client, seed):
    _seed_board(seed)

    res = client.post("/api/boards/a/threads", json={"comment": "hello", "author": "Anonymous", "subject": ""})
    assert res.status_code == 201
    thread_num = res.json()["post_num"]
    assert thread_num == 1

    res = client.post(f"/api/boards/a/threads/{thread_num}/posts", json={"comment": "hi", "author": "Bob"})
    assert res.status_code == 201
    assert res.json()["post_num"] == 2

    board = client.get("/api/boards/a").json()
    assert board["board"]["name"] == "a"
    assert len(board["threads"]) == 1
    op = board["threads"][0]
    assert op["subject"] is None
    assert op["num_replies"] == 1
    assert op["latest_reply_time"] is not None
    assert "sort_time" not in op

    thread = client.get(f"/api/boards/a/threads/{thread_num}").json()
    assert thread["op"]["comment"] == "hello"
    assert [p["post_num"] for p in thread["posts"]] == [2]
    assert thread["posts"][0]["author"] == "Bob"

    assert client.get(f"/api/boards/a/threads/{thread_num}/op").json() == {"is_op": True}
    assert client.get("/api/boards/a/threads/2/op").json() == {"is_op": False}


def test_missing_thread_is_404(client, seed):
    _seed_board(seed)
    assert client.get("/api/boards/a/threads/7").status_code == 404
    assert client.get("/api/boards/a/threads/0").status_code == 422


def test_create_on_missing_parent_is_404(client, seed):
    _seed_board(seed)
    r = client.post("/api/boards/nonexistent/threads", json={"comment": "x", "author": "Anonymous"})
    assert r.status_code == 404

    r = client.post("/api/boards/a/threads/9/posts", json={"comment": "x", "author": "Anonymous"})
    assert r.status_code == 404


def test_writes_are_logged(client, seed):
    _seed_board(seed)
    client.post("/api/boards/a/threads", json={"comment": "logged", "author": "Anonymous"})
    client.post("/api/boards/a/threads/5/posts", json={"comment": "x", "author": "Anonymous"})

    data = client.get("/api/logs/search", params={"action": "CREATE_THREAD"}).json()
    assert data["total"] == 1
    item = data["items"][0]
    assert item["result"] == "OK"
    assert item["entity_type"] == "THREAD"
    assert item["entity_id"] == "a/1"

    failed = client.get("/api/logs/search", params={"action": "CREATE_POST"}).json()
    assert failed["total"] == 1
    assert failed["items"][0]["result"] == "ERROR"


@patch("imageboard.routes.boards.list_categories")
def test_store_failure_is_500(mock_list, client):
    mock_list.side_effect = DataAccessError("list categories: database is locked")
    r = client.get("/api/categories")
    assert r.status_code == 500
    assert "database is locked" in r.json()["detail"]


def test_log_search_by_board(client, seed):
    _seed_board(seed, "a")
    _seed_board(seed, "ab")
    client.post("/api/boards/a/threads", json={"comment": "on a", "author": "Anonymous"})
    client.post("/api/boards/ab/threads", json={"comment": "on ab", "author": "Anonymous"})
    client.post("/api/boards/ab/threads/1/posts", json={"comment": "reply", "author": "Anonymous"})

    only_a = client.get("/api/logs/search", params={"board": "a"}).json()
    assert only_a["total"] == 1
    assert only_a["items"][0]["entity_id"] == "a/1"

    only_ab = client.get("/api/logs/search", params={"board": "ab"}).json()
    assert only_ab["total"] == 2
    assert {i["action"] for i in only_ab["items"]} == {"CREATE_THREAD", "CREATE_POST"}


@patch("imageboard.routes.boards.get_board_threads")
def test_store_failure_is_logged(mock_show, client, caplog):
    mock_show.side_effect = DataAccessError("list threads of 'a': disk I/O error")
    with caplog.at_level(logging.WARNING, logger="imageboard.routes.boards"):
        r = client.get("/api/boards/a")
    assert r.status_code == 500
    warnings = [rec for rec in caplog.records if rec.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "show board a failed" in warnings[0].getMessage()
    assert "disk I/O error" in warnings[0].getMessage()


def test_rejected_writes_are_logged(client, seed, caplog):
    _seed_board(seed)
    with caplog.at_level(logging.WARNING, logger="imageboard.routes.boards"):
        client.post("/api/boards/nonexistent/threads", json={"comment": "x", "author": "Anonymous"})
        client.post("/api/boards/a/threads/9/posts", json={"comment": "x", "author": "Anonymous"})
    messages = [rec.getMessage() for rec in caplog.records if rec.levelno == logging.WARNING]
    assert any(m.startswith("create thread on nonexistent rejected") for m in messages)
    assert any(m.startswith("create post in a/9 rejected") for m in messages)
