import json
import logging

import pytest
from fastapi.testclient import TestClient

from src.todo_api.main import app
from src.todo_api.observability import JSONFormatter
from src.todo_api.settings import get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in [
            "PERSISTENCE_BACKEND",
            "MONGO_URI",
            "MONGO_DB_NAME",
            "MONGO_COLLECTION",
            "PORT",
            "SERVER_TIMEOUT",
            "LOG_FORMAT",
            "CORS_ALLOW_ORIGINS",
        ]:
            monkeypatch.delenv(name, raising=False)
        s = get_settings()
        assert s.persistence_backend == "mongo"
        assert s.mongo_uri == "mongodb://localhost:27017"
        assert s.mongo_db_name == "demo_todo"
        assert s.mongo_collection == "todo"
        assert s.port == 9000
        assert s.server_timeout == 60
        assert s.log_format == "text"
        assert s.cors_allow_origins == ["*"]

    def test_fallbacks_for_bad_values(self, monkeypatch):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "cassandra")
        monkeypatch.setenv("PORT", "not-a-port")
        monkeypatch.setenv("LOG_FORMAT", "xml")
        s = get_settings()
        assert s.persistence_backend == "mongo"
        assert s.port == 9000
        assert s.log_format == "text"

    def test_origins_list(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test ,")
        assert get_settings().cors_allow_origins == ["http://a.test", "http://b.test"]


class TestStartup:
    def test_missing_template_aborts_startup(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
        monkeypatch.setenv("TEMPLATE_DIR", str(tmp_path))
        with pytest.raises(RuntimeError, match="template not found"):
            with TestClient(app):
                pass

    def test_custom_template_dir(self, monkeypatch, tmp_path):
        (tmp_path / "home.tpl").write_text("<h1>Custom home</h1>")
        monkeypatch.setenv("PERSISTENCE_BACKEND", "memory")
        monkeypatch.setenv("TEMPLATE_DIR", str(tmp_path))
        with TestClient(app) as c:
            res = c.get("/")
        assert res.status_code == 200
        assert "Custom home" in res.text


class TestJSONFormatter:
    def test_includes_request_fields(self):
        record = logging.LogRecord("todo", logging.INFO, __file__, 1, "GET /todo", None, None)
        record.method = "GET"
        record.status_code = 200
        out = json.loads(JSONFormatter().format(record))
        assert out["message"] == "GET /todo"
        assert out["level"] == "INFO"
        assert out["method"] == "GET"
        assert out["status_code"] == 200
        assert "path" not in out
