"""
Frontend Bundle Serving Tests
"""

import pytest
from fastapi.testclient import TestClient

from linkedin_api.frontend import is_api_path
from linkedin_api.main import create_app

INDEX_HTML = "<!doctype html><html><body><div id=\"root\"></div></body></html>"
APP_JS = "console.log('feed');"


@pytest.fixture
def static_root(tmp_path):
    root = tmp_path / "dist"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text(INDEX_HTML)
    (root / "assets" / "app.js").write_text(APP_JS)
    return root


@pytest.fixture
def production_client(settings_factory, mock_db, static_root):
    settings = settings_factory(node_env="production", static_root=static_root)
    return TestClient(create_app(settings, database=mock_db))


class TestIsApiPath:
    @pytest.mark.parametrize("path", ["/api", "/api/", "/api/v1/posts", "/api/does-not-exist", "/apiary", "/apifoo"])
    def test_api_paths(self, path):
        assert is_api_path(path) is True

    @pytest.mark.parametrize("path", ["/", "/profile/api", "/feed", "/ap"])
    def test_non_api_paths(self, path):
        assert is_api_path(path) is False


class TestProductionFrontend:
    def test_unknown_path_serves_index(self, production_client):
        response = production_client.get("/unknown/path")

        assert response.status_code == 200
        assert response.text == INDEX_HTML
        assert response.headers["content-type"].startswith("text/html")

    def test_root_serves_index(self, production_client):
        response = production_client.get("/")

        assert response.status_code == 200
        assert response.text == INDEX_HTML

    def test_path_beginning_with_api_is_not_a_client_route(self, production_client):
        response = production_client.get("/apiary")

        assert response.status_code == 404
        assert response.content == b""

    def test_static_file_is_served(self, production_client):
        response = production_client.get("/assets/app.js")

        assert response.status_code == 200
        assert response.text == APP_JS
        assert "javascript" in response.headers["content-type"]
        assert "etag" in response.headers

    def test_static_file_conditional_request(self, production_client):
        etag = production_client.get("/assets/app.js").headers["etag"]

        response = production_client.get("/assets/app.js", headers={"If-None-Match": etag})

        assert response.status_code == 304

    @pytest.mark.parametrize("path", ["/api/does-not-exist", "/api", "/api/v1/unknown", "/api/v2/posts", "/apifoo"])
    def test_api_miss_is_empty_404(self, production_client, path):
        response = production_client.get(path)

        assert response.status_code == 404
        assert response.content == b""

    def test_api_miss_with_other_method_is_empty_404(self, production_client):
        response = production_client.post("/api/does-not-exist", json={})

        assert response.status_code == 404
        assert response.content == b""

    def test_registered_routes_win_over_fallback(self, production_client):
        response = production_client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized - No Token Provided"

    def test_route_group_root_without_trailing_slash(self, production_client):
        response = production_client.get("/api/v1/posts")
        assert response.status_code == 401

    def test_health_is_not_shadowed(self, production_client):
        response = production_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_bundle_fails_only_the_request(self, settings_factory, mock_db, tmp_path):
        settings = settings_factory(node_env="production", static_root=tmp_path / "missing")
        client = TestClient(create_app(settings, database=mock_db))

        response = client.get("/unknown/path")
        assert response.status_code == 404

        assert client.get("/api/nothing").content == b""
        assert client.get("/health").status_code == 200

    def test_missing_index_fails_only_the_request(self, settings_factory, mock_db, tmp_path):
        root = tmp_path / "dist"
        root.mkdir()
        (root / "robots.txt").write_text("User-agent: *")
        settings = settings_factory(node_env="production", static_root=root)
        client = TestClient(create_app(settings, database=mock_db))

        assert client.get("/robots.txt").status_code == 200
        assert client.get("/unknown/path").status_code == 404


class TestDevelopmentMode:
    def test_no_frontend_mount(self, app):
        assert not any(getattr(route, "name", None) == "frontend" for route in app.routes)

    def test_unknown_path_is_not_found(self, client):
        response = client.get("/unknown/path")

        assert response.status_code == 404
        assert response.json()["error"] is True
