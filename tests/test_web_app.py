"""
Tests for the Flask OCR service.
"""

import io

import pytest

from web import create_app
from web.app import APPLIED_STEPS_HEADER


@pytest.fixture
def app_client(fake_reader):
    app = create_app(reader=fake_reader)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def _upload(blob, mime_type="image/png", name="paste.png", **fields):
    data = {key: str(value).lower() for key, value in fields.items()}
    data["image"] = (io.BytesIO(blob.data), name, mime_type)
    return data


class TestConfig:
    """GET /api/config"""

    def test_defaults(self, app_client):
        response = app_client.get("/api/config")
        assert response.status_code == 200
        assert response.get_json() == {
            "preprocess_options": {"has_background_color": False, "has_table_grid_lines": True},
            "character_modes": {"japanese": True, "english": True, "digits": True},
            "supported_image_types": ["image/png", "image/jpeg", "image/webp"],
        }


class TestPreprocessEndpoint:
    """POST /api/preprocess"""

    def test_returns_png_and_steps(self, app_client, table_png):
        response = app_client.post(
            "/api/preprocess", data=_upload(table_png), content_type="multipart/form-data"
        )
        assert response.status_code == 200
        assert response.mimetype == "image/png"
        assert response.headers[APPLIED_STEPS_HEADER] == "remove-table-grid-lines"
        assert response.data != table_png.data

    def test_all_off_echoes_source(self, app_client, table_png):
        response = app_client.post(
            "/api/preprocess",
            data=_upload(table_png, has_table_grid_lines=False),
            content_type="multipart/form-data",
        )
        assert response.status_code == 200
        assert response.headers[APPLIED_STEPS_HEADER] == ""
        assert response.data == table_png.data

    def test_both_steps(self, app_client, table_png):
        response = app_client.post(
            "/api/preprocess",
            data=_upload(table_png, has_background_color=True),
            content_type="multipart/form-data",
        )
        assert response.headers[APPLIED_STEPS_HEADER] == "remove-background-color,remove-table-grid-lines"

    def test_unsupported_type_rejected(self, app_client, table_png):
        response = app_client.post(
            "/api/preprocess",
            data=_upload(table_png, mime_type="image/gif", name="paste.gif"),
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
        assert "PNG / JPEG / WEBP" in response.get_json()["error"]

    def test_missing_image_rejected(self, app_client):
        response = app_client.post("/api/preprocess")
        assert response.status_code == 400

    def test_undecodable_image(self, app_client):
        data = {"image": (io.BytesIO(b"not an image"), "paste.png", "image/png")}
        response = app_client.post("/api/preprocess", data=data, content_type="multipart/form-data")
        assert response.status_code == 422
        assert response.get_json()["error"] == "Preprocessing failed. Check the image and try again."

    def test_invalid_toggle(self, app_client, table_png):
        data = _upload(table_png)
        data["has_table_grid_lines"] = "maybe"
        response = app_client.post("/api/preprocess", data=data, content_type="multipart/form-data")
        assert response.status_code == 400


class TestOcrEndpoint:
    """POST /api/ocr"""

    def test_returns_text(self, app_client, table_png, fake_reader):
        response = app_client.post("/api/ocr", data=_upload(table_png), content_type="multipart/form-data")

        assert response.status_code == 200
        assert response.get_json() == {
            "text": "売上 Sales\n2024",
            "applied_steps": ["remove-table-grid-lines"],
        }
        assert len(fake_reader.calls) == 1

    def test_modes_filter_text(self, app_client, table_png):
        response = app_client.post(
            "/api/ocr",
            data=_upload(table_png, english=False, has_table_grid_lines=False),
            content_type="multipart/form-data",
        )
        body = response.get_json()
        assert body["text"] == "売上 \n2024"
        assert body["applied_steps"] == []

    def test_digits_only_constrains_engine(self, app_client, table_png, fake_reader):
        app_client.post(
            "/api/ocr",
            data=_upload(table_png, japanese=False, english=False),
            content_type="multipart/form-data",
        )
        assert fake_reader.calls[0]["paragraph"] is True
        assert "allowlist" in fake_reader.calls[0]

    def test_no_modes_rejected_before_engine(self, app_client, table_png, fake_reader):
        response = app_client.post(
            "/api/ocr",
            data=_upload(table_png, japanese=False, english=False, digits=False),
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
        assert response.get_json()["error"] == "Turn on at least one reading mode."
        assert fake_reader.calls == []

    def test_engine_failure(self, table_png, reader_factory):
        app = create_app(reader=reader_factory(error=RuntimeError("engine down")))
        with app.test_client() as client:
            response = client.post("/api/ocr", data=_upload(table_png), content_type="multipart/form-data")
        assert response.status_code == 502
        body = response.get_json()
        assert body["error"] == "OCR failed. Check the image and run it again."
        assert "engine down" in body["detail"]
