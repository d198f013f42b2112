"""Tests for the SOS alert endpoint."""
import logging

import pytest

from guardian.services.alert import ALERT_ACK_MESSAGE


@pytest.fixture
def alert_logs(caplog):
    # The "guardian" logger doesn't propagate to root, so hook caplog in directly.
    guardian_logger = logging.getLogger("guardian")
    guardian_logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO)
    yield caplog
    guardian_logger.removeHandler(caplog.handler)


CONTACT = {"id": 1, "name": "Mom", "phone": "555-1234", "relation": "parent"}


class TestAlertEndpoint:
    def test_alert_with_location(self, client, alert_logs):
        response = client.post(
            "/api/alert",
            json={
                "location": {"lat": 40.5, "lng": -74.25},
                "contacts": [CONTACT],
                "message": "Emergency! I need help.",
            },
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": ALERT_ACK_MESSAGE}
        assert "[ALERT] Sending to 1 contacts: Emergency! I need help." in alert_logs.text
        assert "https://www.google.com/maps?q=40.5,-74.25" in alert_logs.text

    def test_alert_without_location(self, client, alert_logs):
        response = client.post(
            "/api/alert",
            json={"contacts": [CONTACT], "message": "Help"},
        )
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "google.com/maps" not in alert_logs.text

    def test_alert_with_no_contacts(self, client):
        response = client.post("/api/alert", json={"contacts": [], "message": "Help"})
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": ALERT_ACK_MESSAGE}

    def test_alert_with_empty_body(self, client):
        response = client.post("/api/alert", json={})
        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_alert_with_empty_location(self, client, alert_logs):
        response = client.post(
            "/api/alert",
            json={"location": {}, "contacts": [], "message": "Help"},
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": ALERT_ACK_MESSAGE}
        assert "google.com/maps" not in alert_logs.text
        assert "[LOCATION] unavailable" in alert_logs.text

    def test_alert_with_partial_location(self, client, alert_logs):
        response = client.post(
            "/api/alert",
            json={"location": {"lat": 40.5}, "contacts": [CONTACT], "message": "Help"},
        )
        assert response.status_code == 200
        assert "google.com/maps" not in alert_logs.text

    def test_alert_with_null_message_and_contacts(self, client, alert_logs):
        response = client.post("/api/alert", json={"contacts": None, "message": None})
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert "[ALERT] Sending to 0 contacts" in alert_logs.text

    def test_alert_with_numeric_contact_phone(self, client):
        contact = dict(CONTACT, phone=5551234)
        response = client.post("/api/alert", json={"contacts": [contact], "message": "Help"})
        assert response.status_code == 200
        assert response.json()["success"] is True
