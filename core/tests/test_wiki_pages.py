from __future__ import annotations

import stat
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from miniwiki_core.app import create_app


@pytest.fixture()
def client(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("MINIWIKI_HOME", str(tmp_path))
    with TestClient(create_app()) as c:
        yield c


def test_save_then_view_renders_saved_body(client: TestClient, tmp_path: Path) -> None:
    r = client.post("/save/test", data={"body": "hello"}, follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/view/test"

    assert (tmp_path / "test.txt").read_bytes() == b"hello"
    assert stat.S_IMODE((tmp_path / "test.txt").stat().st_mode) == 0o600

    view = client.get("/view/test")
    assert view.status_code == 200
    assert view.headers["content-type"].startswith("text/html")
    assert "<h1>test</h1>" in view.text
    assert "<div>hello</div>" in view.text
    assert 'href="/edit/test"' in view.text


@pytest.mark.parametrize("title", ["a", "Z", "FrontPage", "page2024", "0123456789"])
def test_save_view_round_trip_for_valid_titles(client: TestClient, title: str) -> None:
    body = f"body of {title}\nsecond line"
    client.post(f"/save/{title}", data={"body": body}, follow_redirects=False)

    page = client.app.state.wiki.store.load(title)
    assert page.body == body.encode("utf-8")

    view = client.get(f"/view/{title}")
    assert view.status_code == 200
    assert body in view.text


def test_view_missing_page_redirects_to_edit(client: TestClient) -> None:
    r = client.get("/view/Missing", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/edit/Missing"


def test_edit_missing_page_renders_empty_form(client: TestClient) -> None:
    r = client.get("/edit/NewPage")
    assert r.status_code == 200
    assert "Editing NewPage" in r.text
    assert 'action="/save/NewPage"' in r.text
    assert "></textarea>" in r.text


def test_edit_existing_page_prefills_body(client: TestClient) -> None:
    client.post("/save/Draft", data={"body": "work in progress"}, follow_redirects=False)
    r = client.get("/edit/Draft")
    assert r.status_code == 200
    assert ">work in progress</textarea>" in r.text


def test_body_is_html_escaped(client: TestClient) -> None:
    client.post("/save/xss", data={"body": "<script>alert(1)</script>"}, follow_redirects=False)
    r = client.get("/view/xss")
    assert "<script>" not in r.text
    assert "&lt;script&gt;" in r.text


def test_save_without_body_field_stores_empty_page(client: TestClient, tmp_path: Path) -> None:
    r = client.post("/save/blank", follow_redirects=False)
    assert r.status_code == 302
    assert (tmp_path / "blank.txt").read_bytes() == b""


def test_save_reads_body_from_query_string(client: TestClient, tmp_path: Path) -> None:
    r = client.get("/save/q?body=from+query", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/view/q"
    assert (tmp_path / "q.txt").read_bytes() == b"from query"


def test_save_failure_redirects_to_edit_and_logs(
    client: TestClient, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    # A directory where the page file should go makes the write fail.
    (tmp_path / "broken.txt").mkdir()

    with caplog.at_level("INFO", logger="miniwiki_core.ui.handlers"):
        r = client.post("/save/broken", data={"body": "lost"}, follow_redirects=False)

    assert r.status_code == 302
    assert r.headers["location"] == "/edit/broken"

    errors = [
        rec
        for rec in caplog.records
        if rec.name == "miniwiki_core.ui.handlers" and rec.levelname == "ERROR"
    ]
    assert len(errors) == 1
    assert "'broken'" in errors[0].getMessage()


@pytest.mark.parametrize("method", ["get", "post"])
def test_view500_always_fails(client: TestClient, method: str) -> None:
    client.post("/save/exists", data={"body": "x"}, follow_redirects=False)
    for title in ("exists", "anything"):
        r = getattr(client, method)(f"/view500/{title}")
        assert r.status_code == 500
        assert r.text == "500"


def test_view500_logs_the_error(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("INFO", logger="miniwiki_core.ui.handlers"):
        client.get("/view500/x")

    assert any(
        rec.name == "miniwiki_core.ui.handlers"
        and rec.levelname == "INFO"
        and rec.getMessage() == "Returning error 500"
        for rec in caplog.records
    )


@pytest.mark.parametrize(
    "path",
    [
        "/",
        "/view",
        "/view/",
        "/view/a/b",
        "/view/has-dash",
        "/view/dot.txt",
        "/delete/test",
        "/ui/entities",
        "/docs",
        "/openapi.json",
    ],
)
def test_unmatched_paths_are_not_found(client: TestClient, path: str) -> None:
    for method in ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"):
        r = client.request(method, path, follow_redirects=False)
        assert r.status_code == 404
        assert r.text == "404 page not found\n"
        assert r.headers["content-type"].startswith("text/plain")


def test_any_method_dispatches_page_actions(client: TestClient, tmp_path: Path) -> None:
    r = client.delete("/no/such/path")
    assert r.status_code == 404

    r = client.put("/view/test", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/edit/test"

    r = client.put("/save/test", data={"body": "put body"}, follow_redirects=False)
    assert r.status_code == 302
    assert (tmp_path / "test.txt").read_bytes() == b"put body"

    assert client.delete("/view/test").status_code == 200
    assert "put body" in client.options("/edit/test").text
    assert client.patch("/view500/test").status_code == 500


def test_request_log_line(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("INFO", logger="miniwiki_core.app"):
        client.get("/view500/x")
    assert any("GET /view500/x - 500" in rec.getMessage() for rec in caplog.records)
