"""Static frontend and SPA fallback tests."""

import pytest
from fastapi.testclient import TestClient

from grocery_list.api.frontend import resolve_asset
from grocery_list.main import create_app

INDEX = "<html><script>window.IS_DEMO = __IS_DEMO__;</script></html>"


@pytest.fixture
def static_dir(tmp_path):
    static = tmp_path / "static"
    (static / "assets").mkdir(parents=True)
    (static / "index.html").write_text(INDEX)
    (static / "assets" / "app.js").write_text("console.log('hi')")
    (tmp_path / "secret.txt").write_text("nope")
    return static


@pytest.fixture
def frontend_client(settings, static_dir):
    app = create_app(settings.model_copy(update={"static_dir": static_dir}))
    with TestClient(app) as test_client:
        yield test_client


def test_index_has_demo_flag(frontend_client):
    """Test that the placeholder is replaced with the demo flag."""
    response = frontend_client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "window.IS_DEMO = false;" in response.text

    assert frontend_client.get("/index.html").text == response.text


def test_serves_asset(frontend_client):
    response = frontend_client.get("/assets/app.js")
    assert response.status_code == 200
    assert response.text == "console.log('hi')"
    assert "javascript" in response.headers["content-type"]


def test_client_side_route_falls_back_to_index(frontend_client):
    response = frontend_client.get("/lists/weekly")
    assert response.status_code == 200
    assert "window.IS_DEMO" in response.text


def test_missing_file_is_404(frontend_client):
    response = frontend_client.get("/assets/missing.css")
    assert response.status_code == 404
    assert response.text == "404"


def test_api_routes_take_precedence(frontend_client):
    assert frontend_client.get("/api/categories").json() == []
    assert frontend_client.get("/health").json()["status"] == "healthy"


def test_resolve_asset_stays_inside_static_dir(static_dir):
    expected = (static_dir / "assets" / "app.js").resolve()
    assert resolve_asset(static_dir, "assets/app.js") == expected
    assert resolve_asset(static_dir, "../secret.txt") is None
    assert resolve_asset(static_dir, "assets") is None


def test_missing_index_is_404(settings, tmp_path):
    app = create_app(settings.model_copy(update={"static_dir": tmp_path / "empty"}))
    with TestClient(app) as test_client:
        assert test_client.get("/").status_code == 404


def test_packaged_frontend(client):
    """Test that the bundled frontend is served by default."""
    response = client.get("/")
    assert response.status_code == 200
    assert "Grocery List" in response.text
    assert "__IS_DEMO__" not in response.text
    assert client.get("/assets/app.js").status_code == 200
