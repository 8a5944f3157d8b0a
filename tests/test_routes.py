"""API tests through FastAPI's TestClient."""

import json

import pytest
from conftest import FixedRandom, encode_image, encode_png, make_canvas, make_features, make_portrait_pixels
from fastapi.testclient import TestClient
from starlette.datastructures import UploadFile

from picpersona.main import app
from picpersona.routes.analyze import get_rng, get_store


@pytest.fixture
def client(fake_store):
    app.dependency_overrides[get_rng] = lambda: FixedRandom()
    app.dependency_overrides[get_store] = lambda: fake_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def upload(data: bytes, content_type: str = "image/png"):
    return {"image": ("photo.png", data, content_type)}


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["ok"] is True


@pytest.mark.parametrize("gender, expected", [(None, "egenwoman"), ("male", "egenman"), ("female", "egenwoman")])
def test_analyze_portrait(client, fake_store, gender, expected):
    form = {"language": "en"}
    if gender:
        form["gender"] = gender
    res = client.post("/api/analyze", files=upload(encode_png(make_portrait_pixels())), data=form)
    assert res.status_code == 200
    body = res.json()
    assert body["type"] == expected
    assert body["language"] == "en"
    assert body["gender"] == (gender or "random")
    assert len(body["funFacts"]) == 3
    assert body["features"]["faceDetected"] is True
    assert body["confidence"] == body["features"]["faceConfidence"]
    assert "createdAt" in body

    stored = fake_store.rows["analysis_results"]
    assert len(stored) == 1
    assert stored[0]["category"] == expected


def test_analyze_defaults_to_korean(client):
    res = client.post("/api/analyze", files=upload(encode_png(make_portrait_pixels())))
    assert res.status_code == 200
    assert res.json()["title"] == "에겐녀 (Egen Woman)"


def test_analyze_without_face(client, fake_store):
    res = client.post("/api/analyze", files=upload(encode_png(make_canvas())), data={"language": "en"})
    assert res.status_code == 422
    detail = res.json()["detail"]
    assert detail["code"] == "NOT_PORTRAIT"
    assert detail["message"].startswith("Oops!")
    assert fake_store.rows == {}


def test_analyze_rejects_unsupported_type(client):
    res = client.post("/api/analyze", files=upload(b"hello", "text/plain"))
    assert res.status_code == 400


def test_analyze_rejects_undecodable_image(client):
    data = encode_png(make_portrait_pixels())
    res = client.post("/api/analyze", files=upload(data[: len(data) // 2]))
    assert res.status_code == 400
    assert res.json()["detail"] == "Cannot read image"


@pytest.mark.parametrize("fmt", ["TIFF", "BMP", "PPM", "ICO"])
def test_analyze_checks_the_bytes_not_the_label(client, fmt):
    res = client.post("/api/analyze", files=upload(encode_image(make_canvas(size=64), fmt), "image/png"))
    assert res.status_code == 400
    assert res.json()["detail"] == "Unsupported image type"


def test_analyze_refuses_oversized_body_before_reading(client, monkeypatch):
    async def unexpected_read(self, size=-1):
        raise AssertionError("body read despite a known oversized upload")

    monkeypatch.setattr("picpersona.config.MAX_UPLOAD_BYTES", 100)
    monkeypatch.setattr(UploadFile, "read", unexpected_read)
    res = client.post("/api/analyze", files=upload(encode_png(make_portrait_pixels())))
    assert res.status_code == 413
    assert "bytes" in res.json()["detail"]


def test_analyze_rejects_huge_raster(client, monkeypatch):
    monkeypatch.setattr("picpersona.config.MAX_IMAGE_PIXELS", 100)
    res = client.post("/api/analyze", files=upload(encode_png(make_canvas(size=20))))
    assert res.status_code == 413


def test_analyze_storage_failure(fake_store, client):
    fake_store.error = "table missing"
    res = client.post("/api/analyze", files=upload(encode_png(make_portrait_pixels())))
    assert res.status_code == 500


def test_analyze_without_persistence(fake_store):
    app.dependency_overrides[get_rng] = lambda: FixedRandom()
    app.dependency_overrides[get_store] = lambda: None
    try:
        res = TestClient(app).post("/api/analyze", files=upload(encode_png(make_portrait_pixels())))
    finally:
        app.dependency_overrides.clear()
    assert res.status_code == 200
    assert fake_store.rows == {}


def test_categorize_client_result(client, fake_store):
    features = make_features(face_confidence=0.77).model_dump(mode="json", by_alias=True, exclude_none=True)
    res = client.post(
        "/api/categorize",
        data={
            "analysisResult": "tetowoman",
            "language": "en",
            "gender": "female",
            "imageFeatures": json.dumps(features),
        },
    )
    assert res.status_code == 200
    body = res.json()
    assert body["type"] == "tetowoman"
    assert body["title"] == "Teto Woman"
    assert body["confidence"] == 0.77
    assert fake_store.rows["analysis_results"][0]["gender"] == "female"


def test_categorize_aligns_label_with_gender(client):
    res = client.post("/api/categorize", data={"analysisResult": "tetowoman", "gender": "male"})
    assert res.status_code == 200
    body = res.json()
    assert body["type"] == "tetoman"
    assert body["confidence"] is None


def test_categorize_rejects_unknown_label(client):
    res = client.post("/api/categorize", data={"analysisResult": "catman"})
    assert res.status_code == 400


def test_categorize_rejects_bad_features(client):
    res = client.post("/api/categorize", data={"analysisResult": "tetoman", "imageFeatures": "{not json"})
    assert res.status_code == 400


def test_categorize_refuses_non_portraits(client, fake_store):
    features = make_features(face_detected=False).model_dump(mode="json", by_alias=True, exclude_none=True)
    res = client.post(
        "/api/categorize",
        data={"analysisResult": "tetoman", "imageFeatures": json.dumps(features)},
    )
    assert res.status_code == 422
    assert res.json()["detail"]["code"] == "NOT_PORTRAIT"
    assert fake_store.rows == {}


def test_category_content(client):
    res = client.get("/api/categories/egenwoman", params={"language": "en"})
    assert res.status_code == 200
    assert res.json()["title"] == "Egen Woman"
    assert client.get("/api/categories/nobody").status_code == 404


def test_stats(client, fake_store):
    for gender in ("male", "female"):
        client.post("/api/analyze", files=upload(encode_png(make_portrait_pixels())), data={"gender": gender})
    res = client.get("/api/stats")
    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 2
    assert body["by_category"] == {"egenman": 1, "egenwoman": 1}
    assert body["by_gender"] == {"female": 1, "male": 1}


def test_stats_without_persistence():
    app.dependency_overrides[get_store] = lambda: None
    try:
        res = TestClient(app).get("/api/stats")
    finally:
        app.dependency_overrides.clear()
    assert res.json()["total"] == 0


def test_stats_storage_failure(client, fake_store):
    fake_store.error = "boom"
    assert client.get("/api/stats").status_code == 500
