"""
Integration Tests - Alert Endpoints
Owner-scoped CRUD and Kite forwarding.
"""
import json

import httpx
import pytest

from stock_panel.dependencies import get_alert_forwarder
from stock_panel.services.alert_forwarder import KiteAlertForwarder


@pytest.fixture
def kite_requests(app):
    """Route forwarding to an in-process Kite API that accepts everything."""
    received = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "ok"})
        if request.url.path == "/alerts/status":
            return httpx.Response(200, json={"status": "success", "data": [{"symbol": "NIFTY25000CE"}]})
        return httpx.Response(200, json={"status": "success", "message": "queued"})

    forwarder = KiteAlertForwarder(
        api_key="key",
        api_secret="secret",
        base_url="https://kite.test",
        transport=httpx.MockTransport(handler),
    )
    app.dependency_overrides[get_alert_forwarder] = lambda: forwarder
    return received


@pytest.fixture
def failing_kite(app):
    forwarder = KiteAlertForwarder(
        api_key="key",
        api_secret="secret",
        base_url="https://kite.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(503, text="down")),
    )
    app.dependency_overrides[get_alert_forwarder] = lambda: forwarder
    return forwarder


@pytest.fixture
def list_body_kite(app):
    """Kite API answering 200 with a JSON array instead of an object."""
    forwarder = KiteAlertForwarder(
        api_key="key",
        api_secret="secret",
        base_url="https://kite.test",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=["queued"])),
    )
    app.dependency_overrides[get_alert_forwarder] = lambda: forwarder
    return forwarder


class TestAlertCrud:

    def test_requires_auth(self, client):
        assert client.get("/alerts").status_code == 401

    def test_create_alert(self, client, register_and_login, sample_alert_data):
        headers = register_and_login()
        response = client.post("/alerts", json=sample_alert_data, headers=headers)
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Alert created successfully"
        alert = data["alert"]
        assert alert["symbol"] == "NIFTY25000CE"
        assert alert["alert_type"] == "PRICE_ABOVE"
        assert alert["condition"] == ">"
        assert alert["target_value"] == 120.5
        assert alert["is_active"] is True

    def test_list_newest_first(self, client, register_and_login, sample_alert_data):
        headers = register_and_login()
        first = client.post("/alerts", json=sample_alert_data, headers=headers).json()["alert"]
        second = client.post(
            "/alerts", json={**sample_alert_data, "symbol": "BANKNIFTY"}, headers=headers
        ).json()["alert"]

        response = client.get("/alerts", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert [a["id"] for a in data["alerts"]] == [second["id"], first["id"]]

    def test_list_only_own_alerts(self, client, register_and_login, sample_alert_data):
        alice = register_and_login()
        bob = register_and_login("bob", "b@x.com")
        client.post("/alerts", json=sample_alert_data, headers=alice)

        assert client.get("/alerts", headers=bob).json()["alerts"] == []

    def test_update_alert(self, client, register_and_login, sample_alert_data):
        headers = register_and_login()
        alert_id = client.post("/alerts", json=sample_alert_data, headers=headers).json()["alert"]["id"]

        response = client.put(
            f"/alerts?id={alert_id}",
            json={**sample_alert_data, "target_value": 90, "condition": "<", "alert_type": "PRICE_BELOW"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Alert updated successfully"}

        alert = client.get("/alerts", headers=headers).json()["alerts"][0]
        assert alert["target_value"] == 90
        assert alert["condition"] == "<"
        assert alert["is_active"] is True

    def test_toggle_alert(self, client, register_and_login, sample_alert_data):
        headers = register_and_login()
        alert_id = client.post("/alerts", json=sample_alert_data, headers=headers).json()["alert"]["id"]

        response = client.patch(f"/alerts/toggle?id={alert_id}", headers=headers)
        assert response.status_code == 200
        assert client.get("/alerts", headers=headers).json()["alerts"][0]["is_active"] is False

        client.patch(f"/alerts/toggle?id={alert_id}", headers=headers)
        assert client.get("/alerts", headers=headers).json()["alerts"][0]["is_active"] is True

    def test_delete_alert(self, client, register_and_login, sample_alert_data):
        headers = register_and_login()
        alert_id = client.post("/alerts", json=sample_alert_data, headers=headers).json()["alert"]["id"]

        response = client.delete(f"/alerts?id={alert_id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Alert deleted successfully"
        assert client.get("/alerts", headers=headers).json()["alerts"] == []

        assert client.delete(f"/alerts?id={alert_id}", headers=headers).status_code == 404

    def test_non_owner_gets_not_found(self, client, register_and_login, sample_alert_data):
        alice = register_and_login()
        bob = register_and_login("bob", "b@x.com")
        alert_id = client.post("/alerts", json=sample_alert_data, headers=alice).json()["alert"]["id"]

        assert client.put(f"/alerts?id={alert_id}", json=sample_alert_data, headers=bob).status_code == 404
        assert client.patch(f"/alerts/toggle?id={alert_id}", headers=bob).status_code == 404
        assert client.delete(f"/alerts?id={alert_id}", headers=bob).status_code == 404

        # Untouched for the owner
        alert = client.get("/alerts", headers=alice).json()["alerts"][0]
        assert alert["is_active"] is True

    def test_missing_id(self, client, register_and_login):
        headers = register_and_login()
        response = client.delete("/alerts", headers=headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Alert ID is required"

    def test_non_integer_id(self, client, register_and_login):
        headers = register_and_login()
        assert client.patch("/alerts/toggle?id=abc", headers=headers).status_code == 400

    @pytest.mark.parametrize("field,value", [
        ("alert_type", "PRICE_SIDEWAYS"),
        ("condition", "!="),
        ("symbol", "   "),
    ])
    def test_invalid_payload(self, client, register_and_login, sample_alert_data, field, value):
        headers = register_and_login()
        response = client.post("/alerts", json={**sample_alert_data, field: value}, headers=headers)
        assert response.status_code == 400

    @pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_target_value(self, client, register_and_login, sample_alert_data, literal):
        headers = register_and_login()
        body = json.dumps({**sample_alert_data, "target_value": 0}).replace(
            '"target_value": 0', f'"target_value": {literal}'
        )
        response = client.post(
            "/alerts", content=body, headers={**headers, "Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert client.get("/alerts", headers=headers).json()["alerts"] == []


class TestKiteForwarding:

    def test_created_alert_is_forwarded(self, client, register_and_login, sample_alert_data, kite_requests):
        headers = register_and_login()
        client.post("/alerts", json=sample_alert_data, headers=headers)

        assert len(kite_requests) == 1
        request = kite_requests[0]
        assert request.method == "POST"
        assert request.url.path == "/alerts"
        assert request.headers["X-API-Key"] == "key"
        assert request.headers["X-API-Secret"] == "secret"
        payload = json.loads(request.content)
        assert payload["symbol"] == "NIFTY25000CE"
        assert payload["condition"] == ">"
        assert payload["user_id"] == 1

    def test_forwarding_failure_does_not_fail_create(self, client, register_and_login, sample_alert_data, failing_kite):
        headers = register_and_login()
        response = client.post("/alerts", json=sample_alert_data, headers=headers)
        assert response.status_code == 201

    def test_kite_not_configured(self, client, register_and_login):
        headers = register_and_login()
        response = client.post("/alerts/test-kite", headers=headers)
        assert response.status_code == 400

    def test_kite_connection_ok(self, client, register_and_login, kite_requests):
        headers = register_and_login()
        response = client.post("/alerts/test-kite", headers=headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Successfully connected to Kite API"
        assert kite_requests[0].url.path == "/health"

    def test_kite_connection_failure(self, client, register_and_login, failing_kite):
        headers = register_and_login()
        response = client.post("/alerts/test-kite", headers=headers)
        assert response.status_code == 500

    def test_non_object_response_does_not_fail_create(
        self, client, register_and_login, sample_alert_data, list_body_kite
    ):
        headers = register_and_login()
        response = client.post("/alerts", json=sample_alert_data, headers=headers)
        assert response.status_code == 201
        assert len(client.get("/alerts", headers=headers).json()["alerts"]) == 1


class TestKiteSyncAndStatus:

    def test_sync_not_configured(self, client, register_and_login):
        headers = register_and_login()
        assert client.post("/alerts/sync", headers=headers).status_code == 400

    def test_sync_sends_active_alerts(self, client, register_and_login, sample_alert_data, kite_requests):
        headers = register_and_login()
        client.post("/alerts", json=sample_alert_data, headers=headers)
        paused_id = client.post(
            "/alerts", json={**sample_alert_data, "symbol": "BANKNIFTY"}, headers=headers
        ).json()["alert"]["id"]
        client.patch(f"/alerts/toggle?id={paused_id}", headers=headers)
        kite_requests.clear()

        response = client.post("/alerts/sync", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert (data["delivered"], data["total"]) == (1, 1)
        assert [json.loads(r.content)["symbol"] for r in kite_requests] == ["NIFTY25000CE"]

    def test_sync_counts_failures(self, client, register_and_login, sample_alert_data, failing_kite):
        headers = register_and_login()
        client.post("/alerts", json=sample_alert_data, headers=headers)

        data = client.post("/alerts/sync", headers=headers).json()
        assert (data["delivered"], data["total"]) == (0, 1)

    def test_status_not_configured(self, client, register_and_login):
        headers = register_and_login()
        assert client.get("/alerts/kite-status", headers=headers).status_code == 400

    def test_status(self, client, register_and_login, kite_requests):
        headers = register_and_login()
        response = client.get("/alerts/kite-status", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "alerts": [{"symbol": "NIFTY25000CE"}]}
        request = kite_requests[0]
        assert request.url.path == "/alerts/status"
        assert request.url.params["user_id"] == "1"

    def test_status_non_object_response(self, client, register_and_login, list_body_kite):
        headers = register_and_login()
        assert client.get("/alerts/kite-status", headers=headers).status_code == 500

    def test_requires_auth(self, client):
        assert client.post("/alerts/sync").status_code == 401
        assert client.get("/alerts/kite-status").status_code == 401
