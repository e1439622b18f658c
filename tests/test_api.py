from pathlib import Path

from fastapi.testclient import TestClient

from conftest import pptx_bytes, slide_xml
from pptx_html5.api import create_app
from pptx_html5.config import AppConfig
from pptx_html5.errors import OutputWriteError

PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


def _client(config: AppConfig) -> TestClient:
    return TestClient(create_app(config))


def test_info_and_health(app_config: AppConfig) -> None:
    client = _client(app_config)
    info = client.get("/").json()
    assert info["message"] == "PPTX to HTML5 Converter Service"
    assert "POST /convert" in info["endpoints"]
    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["timestamp"]


def test_convert_upload(app_config: AppConfig) -> None:
    payload = pptx_bytes({"ppt/slides/slide1.xml": slide_xml(1), "ppt/media/image1.png": b"png"})
    response = _client(app_config).post("/convert", files={"pptx": ("deck.pptx", payload, PPTX_MIME)})
    assert response.status_code == 200
    body = response.json()
    assert body["inputFile"] == "deck.pptx"
    assert body["result"]["success"] is True
    assert body["result"]["slides"] == 1
    assert body["result"]["mediaFiles"] == 1
    output_dir = Path(body["outputDirectory"])
    assert (output_dir / "index.html").exists()
    assert list(app_config.runtime.upload_dir.iterdir()) == []


def test_rejects_non_pptx_upload(app_config: AppConfig) -> None:
    response = _client(app_config).post("/convert", files={"pptx": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400
    assert response.json()["detail"] == "Only PPTX files are allowed"


def test_missing_upload(app_config: AppConfig) -> None:
    response = _client(app_config).post("/convert", files={"other": ("deck.pptx", b"x", PPTX_MIME)})
    assert response.status_code == 400


def test_corrupt_upload_maps_to_client_error(app_config: AppConfig) -> None:
    response = _client(app_config).post("/convert", files={"pptx": ("deck.pptx", b"not a zip", PPTX_MIME)})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Conversion failed"
    assert body["details"]
    assert list(app_config.runtime.upload_dir.iterdir()) == []


def test_size_limit(app_config: AppConfig) -> None:
    app_config.runtime.max_file_size_mb = 1
    payload = b"\x00" * (1024 * 1024 + 1)
    response = _client(app_config).post("/convert", files={"pptx": ("deck.pptx", payload, PPTX_MIME)})
    assert response.status_code == 413


def test_upload_store_failure_returns_json_error(app_config: AppConfig, monkeypatch) -> None:
    def failing_write(path: Path, data: bytes) -> None:
        raise OutputWriteError("disk full")

    monkeypatch.setattr("pptx_html5.api.routers.convert.atomic_write_bytes", failing_write)
    payload = pptx_bytes({"ppt/slides/slide1.xml": slide_xml(1)})
    response = _client(app_config).post("/convert", files={"pptx": ("deck.pptx", payload, PPTX_MIME)})
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Conversion failed"
    assert body["details"] == "disk full"
