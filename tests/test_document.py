from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from spaceapi.app import create_app
from spaceapi.config import Settings
from spaceapi.errors import DocumentLoadError
from spaceapi.services.document import load_document
from spaceapi.utils.rate_limiter import RateLimiter

from conftest import make_document


@pytest.fixture()
def data_file(tmp_path):
    payload = make_document().to_public()
    payload["ext_custom"] = {"kept": True}
    path = tmp_path / "spaceapi.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_document_reads_file(data_file):
    document = load_document(data_file)
    assert document.space == "Test Space"
    assert document.state.open is True


def test_unknown_keys_round_trip(data_file):
    assert load_document(data_file).to_public()["ext_custom"] == {"kept": True}


def test_missing_file_is_fatal(tmp_path):
    with pytest.raises(DocumentLoadError):
        load_document(tmp_path / "absent.json")


def test_invalid_json_is_fatal(tmp_path):
    path = tmp_path / "spaceapi.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DocumentLoadError):
        load_document(path)


def test_missing_required_field_is_fatal(tmp_path):
    path = tmp_path / "spaceapi.json"
    path.write_text(json.dumps({"logo": "x", "url": "y"}), encoding="utf-8")
    with pytest.raises(DocumentLoadError):
        load_document(path)


def test_lifespan_loads_document_and_runs_cleanup(data_file):
    settings = Settings(_env_file=None, auth_key="k", data_file=str(data_file), cleanup_enabled=True)
    limiter = RateLimiter()
    app = create_app(settings=settings, limiter=limiter)

    with TestClient(app) as client:
        assert limiter.running
        assert client.get("/api/space").json()["space"] == "Test Space"

    assert not limiter.running


def test_lifespan_leaves_cleanup_off_when_disabled(data_file):
    settings = Settings(_env_file=None, data_file=str(data_file), cleanup_enabled=False)
    limiter = RateLimiter()

    with TestClient(create_app(settings=settings, limiter=limiter)):
        assert not limiter.running


def test_lifespan_fails_on_missing_document(tmp_path):
    settings = Settings(_env_file=None, data_file=str(tmp_path / "absent.json"), cleanup_enabled=False)
    app = create_app(settings=settings)

    with pytest.raises(DocumentLoadError):
        with TestClient(app):
            pass


def test_status_routes_answer_503_until_document_is_loaded():
    app = create_app(settings=Settings(_env_file=None, cleanup_enabled=False))

    # No context manager: the lifespan never runs, so nothing is loaded.
    client = TestClient(app)
    response = client.get("/api/space")

    assert response.status_code == 503
    assert response.json()["detail"] == {
        "error_code": "DOCUMENT_NOT_LOADED",
        "message": "Status document not loaded",
    }
    assert client.get("/health").text == "OK"
