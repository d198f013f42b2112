"""Tests for the scenario risk assessment endpoint."""
import asyncio
import json

import pytest

from fakes import FakeModelClient, text_response
from guardian.model_client import ModelClientError, ModelNotConfiguredError
from guardian.services.assessment import (
    FALLBACK_ASSESSMENT,
    RISK_LEVELS,
    assess_scenario,
    build_assessment_prompt,
    normalize_assessment,
)


def json_response(payload) -> dict:
    return text_response(json.dumps(payload))


class TestPrompt:
    def test_scenario_is_embedded_verbatim(self):
        prompt = build_assessment_prompt('late-night-walk "alone"')
        assert 'scenario: "late-night-walk "alone""' in prompt
        assert '"riskLevel"' in prompt
        assert '"guardianMessage"' in prompt


class TestNormalize:
    def test_accepts_valid_shape(self):
        raw = {"riskLevel": "High", "guardianMessage": " Stay near lights. "}
        assert normalize_assessment(raw) == {
            "riskLevel": "High",
            "guardianMessage": "Stay near lights.",
        }

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            [],
            "High",
            {"riskLevel": "Severe", "guardianMessage": "x"},
            {"riskLevel": "low", "guardianMessage": "x"},
            {"riskLevel": "Medium"},
            {"riskLevel": "Medium", "guardianMessage": "   "},
        ],
    )
    def test_rejects_bad_shapes(self, raw):
        assert normalize_assessment(raw) is None


class TestAssessScenario:
    def test_requests_json_output(self):
        client = FakeModelClient(
            response=json_response({"riskLevel": "Medium", "guardianMessage": "Share your trip."})
        )
        result = asyncio.run(assess_scenario(client, "rideshare"))
        assert result == {"riskLevel": "Medium", "guardianMessage": "Share your trip."}
        assert client.calls[0]["generation_config"] == {"responseMimeType": "application/json"}
        assert client.calls[0]["model"] == "test-text"

    @pytest.mark.parametrize(
        "error",
        [
            ModelClientError("Error contacting Gemini"),
            ModelNotConfiguredError("GEMINI_API_KEY not configured."),
            RuntimeError("unexpected"),
        ],
    )
    def test_provider_errors_fall_back(self, error):
        client = FakeModelClient(error=error)
        assert asyncio.run(assess_scenario(client, "party")) == FALLBACK_ASSESSMENT

    def test_malformed_json_falls_back(self):
        client = FakeModelClient(response=text_response("not json at all"))
        assert asyncio.run(assess_scenario(client, "campus")) == FALLBACK_ASSESSMENT

    def test_fallback_is_not_shared_state(self):
        client = FakeModelClient(error=ModelClientError("down"))
        result = asyncio.run(assess_scenario(client, "campus"))
        result["riskLevel"] = "High"
        assert FALLBACK_ASSESSMENT["riskLevel"] == "Low"


class TestAssessEndpoint:
    @pytest.fixture
    def model_client(self):
        return FakeModelClient(
            response=json_response({"riskLevel": "High", "guardianMessage": "Call a friend."})
        )

    def test_returns_model_assessment(self, client, model_client):
        response = client.post("/assess", json={"scenario": "late-night-walk"})
        assert response.status_code == 200
        assert response.json() == {"riskLevel": "High", "guardianMessage": "Call a friend."}
        prompt = model_client.calls[0]["contents"]
        assert '"late-night-walk"' in prompt

    def test_provider_down_returns_fallback(self, client, model_client):
        model_client.error = ModelClientError("Gemini returned 503")
        response = client.post("/assess", json={"scenario": "party"})
        assert response.status_code == 200
        assert response.json() == FALLBACK_ASSESSMENT

    def test_missing_scenario_is_still_assessed(self, client, model_client):
        response = client.post("/assess", json={})
        assert response.status_code == 200
        assert response.json()["riskLevel"] in RISK_LEVELS


class TestScenarioCatalogue:
    def test_lists_known_scenarios(self, client):
        response = client.get("/api/scenarios")
        assert response.status_code == 200
        ids = [s["id"] for s in response.json()]
        assert ids == ["late-night-walk", "rideshare", "party", "campus"]
