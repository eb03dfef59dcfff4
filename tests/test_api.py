"""
Tests for the session HTTP API.
"""

from __future__ import annotations

import httpx
from fastapi.testclient import TestClient

from ordercore.application.ports.order_submission import OrderSubmissionPort
from ordercore.application.use_cases.checkout_handoff import CheckoutHandoffUseCase
from ordercore.domain.entities.order_submission import FailureCategory, OrderSubmission, SubmissionResult
from ordercore.infrastructure.navigation.recording_navigator import RecordingNavigator
from ordercore.main import app
from ordercore.wiring import dependencies

client = TestClient(app)

CONTACT = {"name": "Ana", "email": "ana@example.com", "phone": "(11) 98765-4321"}


def test_health():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_update_selection_returns_fresh_pricing():
    response = client.patch(
        "/api/v1/sessions/api-1/selection",
        json={"recipient_count": 2, "add_on_ids": ["4k-quality", "fast-delivery"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == "83.99"
    assert data["currency"] == "BRL"
    assert [item["id"] for item in data["items"]] == ["base-video", "4k-quality", "fast-delivery"]
    assert data["summary"]["total"] == "R$ 83,99"

    pricing = client.get("/api/v1/sessions/api-1/pricing").json()
    assert pricing["total"] == "83.99"


def test_toggle_bundle_replaces_individual_add_ons():
    client.patch("/api/v1/sessions/api-2/selection", json={"add_on_ids": ["4k-quality"]})
    response = client.patch("/api/v1/sessions/api-2/selection", json={"toggle_add_on": "combo-addons"})

    assert response.status_code == 200
    assert response.json()["bundle_discount"] == "8.91"
    selection = client.get("/api/v1/sessions/api-2/selection").json()
    assert selection["add_on_ids"] == ["combo-addons"]


def test_invalid_selection_is_rejected():
    response = client.patch("/api/v1/sessions/api-3/selection", json={"add_on_ids": ["gift-wrap"]})
    assert response.status_code == 400

    response = client.patch("/api/v1/sessions/api-3/selection", json={"photo_urls": ["http://insecure.example.com/a.jpg"]})
    assert response.status_code == 400


def test_step_attribution_and_clear():
    assert client.put("/api/v1/sessions/api-4/step", json={"step": 3}).json() == {"step": 3}
    assert client.put("/api/v1/sessions/api-4/step", json={"step": 0}).status_code == 422

    first = client.post("/api/v1/sessions/api-4/attribution", json={"params": {"utm_source": "facebook"}})
    second = client.post("/api/v1/sessions/api-4/attribution", json={"params": {"utm_source": "google"}})
    assert first.json()["params"] == {"utm_source": "facebook"}
    assert second.json()["params"] == {"utm_source": "facebook"}

    client.patch("/api/v1/sessions/api-4/selection", json={"recipient_count": 3})
    assert client.delete("/api/v1/sessions/api-4").status_code == 204

    assert client.get("/api/v1/sessions/api-4/pricing").json()["total"] == "49.99"
    assert client.put("/api/v1/sessions/api-4/step", json={"step": 1}).json() == {"step": 1}


def test_checkout_returns_redirect_url():
    client.patch(
        "/api/v1/sessions/api-5/selection",
        json={"recipient_count": 1, "add_on_ids": ["child-photo"], "contact": CONTACT},
    )

    response = client.post("/api/v1/sessions/api-5/checkout")

    assert response.status_code == 200
    data = response.json()
    assert data["provider"] == "lastlink"
    assert data["endpoint_id"] == "withPhoto"
    url = httpx.URL(data["url"])
    assert url.params["customer_phone"] == "11987654321"
    assert url.params["bump_child_photo"] == "true"
    # Session is cleared after the hand-off.
    assert client.get("/api/v1/sessions/api-5/selection").json()["add_on_ids"] == []


def test_checkout_without_contact_is_rejected():
    response = client.post("/api/v1/sessions/api-6/checkout")

    assert response.status_code == 400


def test_checkout_failure_maps_to_bad_gateway(monkeypatch):
    class FailingSubmitter(OrderSubmissionPort):
        async def submit(self, submission: OrderSubmission) -> SubmissionResult:
            return SubmissionResult(success=False, attempts=3, category=FailureCategory.network, error="down")

    def failing_use_case(session_id: str) -> CheckoutHandoffUseCase:
        return CheckoutHandoffUseCase(
            store=dependencies.get_selection_store(session_id),
            attribution=dependencies.get_attribution_store(session_id),
            catalog=dependencies.get_endpoint_catalog(),
            submitter=FailingSubmitter(),
            navigator=RecordingNavigator(),
        )

    monkeypatch.setattr("ordercore.api.v1.sessions.get_checkout_handoff_use_case", failing_use_case)
    client.patch("/api/v1/sessions/api-7/selection", json={"contact": CONTACT})

    response = client.post("/api/v1/sessions/api-7/checkout")

    assert response.status_code == 502
    assert response.json()["detail"]["category"] == "network"
    assert client.get("/api/v1/sessions/api-7/selection").json()["contact"]["name"] == "Ana"


def test_null_fields_in_patch_keep_stored_values():
    client.patch("/api/v1/sessions/api-8/selection", json={"recipient_count": 3, "add_on_ids": ["4k-quality"], "message": "Oi"})

    response = client.patch("/api/v1/sessions/api-8/selection", json={"recipient_count": None, "add_on_ids": None})

    assert response.status_code == 200
    assert response.json()["total"] == "81.99"
    selection = client.get("/api/v1/sessions/api-8/selection").json()
    assert selection["recipient_count"] == 3
    assert selection["add_on_ids"] == ["4k-quality"]
    assert selection["message"] == "Oi"


def test_clearing_a_session_releases_its_notifier():
    client.patch("/api/v1/sessions/api-9/selection", json={"recipient_count": 2})
    assert "api-9" in dependencies._notifiers

    assert client.delete("/api/v1/sessions/api-9").status_code == 204
    assert "api-9" not in dependencies._notifiers


def test_checkout_without_submitter_config_is_logged_server_error(monkeypatch):
    def missing_webhook():
        raise ValueError("ORDER_WEBHOOK_URL is required to submit orders.")

    monkeypatch.setattr(dependencies, "get_order_submitter", missing_webhook)
    client.patch("/api/v1/sessions/api-10/selection", json={"contact": CONTACT})

    response = client.post("/api/v1/sessions/api-10/checkout")

    assert response.status_code == 500
    assert response.json()["detail"] == "Order submission is not configured"
