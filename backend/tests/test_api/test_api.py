"""Tests for API endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from mandala.config import settings
from mandala.core.geometry import POSITION_OFFSET
from mandala.main import app
from tests.conftest import reference_svg, sample_payload


client = TestClient(app)

CLOCKWISE = {"preset": "rave-wheel", "direction": "clockwise", "rotation_offset_degrees": 0}
SMALL = {"center": [500, 500], "inner_radius": 300, "outer_radius": 400}


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["rings_registered"] == 7


def test_list_rings():
    response = client.get("/api/rings")
    assert response.status_code == 200
    rings = response.json()["rings"]
    assert [r["id"] for r in rings] == [
        "channels",
        "trigrams",
        "quarters-faces",
        "hexagrams",
        "gate-names",
        "numbers",
        "lines",
    ]
    lines = rings[-1]
    assert lines["unit"] == "gate_line"
    assert lines["units"] == 384


def test_render_numbers():
    response = client.post("/api/rings/numbers", json={"sequence": CLOCKWISE, "geometry": SMALL})
    assert response.status_code == 200
    data = response.json()
    assert data["ring_id"] == "numbers"
    assert data["sequence"] == "rave-wheel"
    assert data["element_count"] == 64
    assert 'data-ring="numbers"' in data["svg"]
    assert data["processing_time_ms"] > 0


def test_render_with_payload():
    payload = sample_payload().model_dump(mode="json")
    response = client.post("/api/rings/gate-names", json={"sequence": CLOCKWISE, "payload": payload})
    assert response.status_code == 200
    assert "Name 13" in response.json()["svg"]


def test_render_custom_ordering():
    sequence = {"ordering": list(range(1, 65)), "direction": "counter-clockwise", "rotation_offset_degrees": 10}
    response = client.post("/api/rings/hexagrams", json={"sequence": sequence, "geometry": SMALL})
    assert response.status_code == 200
    assert response.json()["sequence"] == "custom"


@pytest.mark.parametrize("missing", ["direction", "rotation_offset_degrees"])
def test_render_requires_direction_and_offset(missing):
    sequence = {k: v for k, v in CLOCKWISE.items() if k != missing}
    response = client.post("/api/rings/numbers", json={"sequence": sequence})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "MissingMandatoryField"
    assert detail["field"] == missing


def test_render_incomplete_sequence():
    sequence = {"ordering": list(range(1, 64)) + [1], "direction": "clockwise", "rotation_offset_degrees": 0}
    response = client.post("/api/rings/numbers", json={"sequence": sequence})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "IncompleteSequence"
    assert detail["missing"] == [64]
    assert detail["duplicates"] == [1]


def test_render_missing_knowledge():
    response = client.post("/api/rings/lines", json={"sequence": CLOCKWISE})
    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "MissingKnowledge"


def test_render_unknown_ring():
    response = client.post("/api/rings/nope", json={"sequence": CLOCKWISE})
    assert response.status_code == 404
    assert response.json()["detail"]["ring_id"] == "nope"


def test_render_unknown_preset():
    sequence = dict(CLOCKWISE, preset="nope")
    response = client.post("/api/rings/numbers", json={"sequence": sequence})
    assert response.status_code == 422


def test_extract_reference():
    response = client.post("/api/extract", json={"svg": reference_svg(), "sequence": CLOCKWISE})
    assert response.status_code == 200
    report = response.json()["report"]
    assert report["counts"]["gate"] == 64
    assert report["audit"]["discrepancies"] == []
    assert report["position_offset"]["mean"] == pytest.approx(POSITION_OFFSET, abs=1e-4)
    assert report["ring_geometry"]["inner_radius"] == 300.0


def test_extract_incomplete():
    svg = reference_svg(drop={"SYMBOL_-_GATE-DOT_-_40"})
    response = client.post("/api/extract", json={"svg": svg, "classes": ["gate_dot"]})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "ExtractionCompletenessFailure"
    assert detail["discrepancies"][0]["missing"] == ["40"]


def test_extract_unknown_class():
    response = client.post("/api/extract", json={"svg": reference_svg(), "classes": ["nope"]})
    assert response.status_code == 422


def test_extract_invalid_svg():
    response = client.post("/api/extract", json={"svg": "<not-svg"})
    assert response.status_code == 422
    assert response.json()["detail"]["error"] == "InvalidDiagram"


def test_render_with_default_knowledge(tmp_path, monkeypatch):
    path = tmp_path / "knowledge.json"
    path.write_text(sample_payload().model_dump_json())
    monkeypatch.setattr(settings, "knowledge_path", str(path))
    response = client.post("/api/rings/channels", json={"sequence": CLOCKWISE})
    assert response.status_code == 200
    assert response.json()["element_count"] == 72
