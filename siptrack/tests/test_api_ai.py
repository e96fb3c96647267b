from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from siptrack.api import api_ai
from siptrack.api.api_ai import (
    AIUnavailableError, DrinkAnalysisError, analyze_drink_image, normalize_estimate, parse_ai_json
)
from siptrack.api.api_run import app
from siptrack.utilities import config


class FakeResponses:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(output_text=self.text)


def fake_client(text):
    return SimpleNamespace(responses=FakeResponses(text))


def test_parse_plain_and_fenced_json():
    assert parse_ai_json('{"name": "Lager"}') == {"name": "Lager"}
    fenced = 'Here you go:\n```json\n{"name": "Lager", "calories": 150,}\n```'
    assert parse_ai_json(fenced) == {"name": "Lager", "calories": 150}
    assert parse_ai_json("no json here") is None


def test_normalize_estimate_maps_short_keys():
    estimate = normalize_estimate({"brand": " Guinness ", "name": "Draught", "volume": 440,
                                   "abv": "4.2", "carbs": 10, "sugar": None, "price": -1, "quantity": 6})
    assert estimate == {
        "brand": "Guinness", "name": "Draught", "volume_ml": 440, "abv_percent": 4.2,
        "calories": 0, "carbs_g": 10, "sugar_g": 0, "unit_price": 0, "quantity": 1,
    }


def test_normalize_estimate_requires_a_name():
    with pytest.raises(DrinkAnalysisError):
        normalize_estimate({"brand": "Unknown", "calories": 100})


def test_analyze_drink_image_with_client():
    client = fake_client('```json\n{"brand": "Corona", "name": "Extra", "calories": 148}\n```')
    estimate = analyze_drink_image(b"\xff\xd8fake", "image/jpeg", client=client)
    assert estimate["name"] == "Extra"
    assert estimate["calories"] == 148
    call = client.responses.calls[0]
    assert call["model"] == config.OPENAI_MODEL
    image_part = call["input"][0]["content"][1]
    assert image_part["type"] == "input_image"
    assert image_part["image_url"].startswith("data:image/jpeg;base64,")


def test_analyze_drink_image_unusable_output(tmp_path, monkeypatch):
    monkeypatch.setattr(api_ai.paths, "AI_RAW_FILE", tmp_path / "raw.txt")
    with pytest.raises(DrinkAnalysisError):
        analyze_drink_image(b"img", "image/png", client=fake_client("I can't tell, sorry."))
    assert (tmp_path / "raw.txt").read_text(encoding="utf-8") == "I can't tell, sorry."


def test_analyze_drink_image_without_key(monkeypatch):
    monkeypatch.setattr(config, "OPENAI_API_KEY", "")
    with pytest.raises(AIUnavailableError):
        analyze_drink_image(b"img", "image/png")


def test_endpoint_returns_estimate(monkeypatch):
    def fake_analyze(content, mime_type):
        assert content == b"jpeg-bytes"
        assert mime_type == "image/jpeg"
        return {"brand": "Hop Co", "name": "IPA", "quantity": 1}

    monkeypatch.setattr(api_ai, "analyze_drink_image", fake_analyze)
    client = TestClient(app)
    resp = client.post("/api/analyze-drink", files={"image": ("beer.jpg", b"jpeg-bytes", "image/jpeg")})
    assert resp.status_code == 200
    assert resp.json()["name"] == "IPA"


def test_endpoint_rejects_non_images():
    client = TestClient(app)
    resp = client.post("/api/analyze-drink", files={"image": ("notes.txt", b"hello", "text/plain")})
    assert resp.status_code == 400


def test_endpoint_error_statuses(monkeypatch):
    client = TestClient(app)
    upload = {"image": ("beer.png", b"png", "image/png")}

    def unavailable(content, mime_type):
        raise AIUnavailableError("no key")

    monkeypatch.setattr(api_ai, "analyze_drink_image", unavailable)
    assert client.post("/api/analyze-drink", files=upload).status_code == 503

    def failed(content, mime_type):
        raise DrinkAnalysisError("could not identify")

    monkeypatch.setattr(api_ai, "analyze_drink_image", failed)
    assert client.post("/api/analyze-drink", files=upload).status_code == 502
