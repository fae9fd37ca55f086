"""Edge case and error handling tests."""
import httpx
from fastapi import status

from conftest import ADMIN_HEADERS, make_item


class TestValidation:
    """Request validation and configuration errors."""

    def test_invalid_json_payload(self, client):
        response = client.post(
            "/access/action",
            content="invalid json",
            headers={"Content-Type": "application/json"}
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_unknown_category_is_rejected(self, client):
        response = client.post("/access/action", json={
            "principal": {"id": 1, "role": "admin"},
            "category": "invoices",
            "action": "view"
        })
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_pair_outside_matrix_is_bad_request(self, client):
        """A known category/action that the matrix does not define is a config error, not a deny."""
        response = client.post("/access/action", json={
            "principal": {"id": 1, "role": "admin"},
            "category": "patients",
            "action": "receive"
        })
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "receive" in response.json()["detail"]

    def test_unknown_endpoint_is_bad_request(self, client):
        response = client.post("/access/endpoint", json={
            "principal": {"id": 1, "role": "admin"},
            "method": "PATCH",
            "endpoint": "/api/patients"
        })
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_principal_role(self, client):
        response = client.post("/capabilities", json={"principal": {"id": 9}})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_unknown_role_gets_nothing(self, client):
        response = client.post("/access/action", json={
            "principal": {"id": 9, "role": "nonexistent_role_12345"},
            "category": "patients",
            "action": "view"
        })
        assert response.status_code == 200
        assert response.json()["decision"] is False

    def test_empty_batch_request(self, client):
        response = client.post("/access/batch", json=[])
        assert response.status_code == 200
        assert response.json() == []

    def test_batch_with_bad_pair_fails_whole_request(self, client):
        response = client.post("/access/batch", json=[
            {"principal": {"id": 1, "role": "admin"}, "category": "users", "action": "view"},
            {"principal": {"id": 1, "role": "admin"}, "category": "users", "action": "complete"},
        ])
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestAdminKey:
    """Management endpoints require the admin API key."""

    def test_missing_key(self, client):
        response = client.post("/cache/invalidate")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_key(self, client, upstream):
        response = client.delete("/static-data/3", headers={"Authorization": "Bearer wrong"})
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert upstream.calls == []

    def test_create_without_key(self, client, upstream):
        response = client.post("/static-data", json=make_item("role", "auditor"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert upstream.calls == []


class TestUpstreamFailures:
    """Upstream errors surface with a matching status and are never cached."""

    def test_unsuccessful_envelope_is_bad_gateway(self, client, upstream):
        upstream.add("GET", "/static/status", {"success": False, "data": None, "message": "Type disabled"})

        response = client.get("/static/status")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["detail"] == "Type disabled"
        assert client.get("/health").json()["checks"]["cache"]["cached_keys"] == []

    def test_upstream_status_is_passed_through(self, client, upstream):
        response = client.get("/static/role/ghost")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Not found"

    def test_upstream_server_error(self, client, upstream):
        upstream.add("GET", "/static/role", {"success": False, "message": "Database offline"}, status_code=500)
        response = client.get("/static/role")
        assert response.status_code == 500
        assert response.json()["detail"] == "Database offline"

    def test_unreachable_upstream(self, client, upstream):
        upstream.add("GET", "/static", httpx.ConnectError("connection refused"))
        response = client.get("/static")
        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert "Unable to reach" in response.json()["detail"]

    def test_failed_mutation_keeps_cache(self, client, upstream):
        upstream.ok("GET", "/static/role", [make_item("role", "admin")])
        upstream.add("POST", "/static-data", {"success": False, "message": "Duplicate code"}, status_code=422)
        client.get("/static/role")

        response = client.post("/static-data", json=make_item("role", "admin"), headers=ADMIN_HEADERS)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert client.get("/health").json()["checks"]["cache"]["cached_keys"] == ["role"]

    def test_unsuccessful_mutation_is_bad_gateway(self, client, upstream):
        upstream.ok("GET", "/static/role", [make_item("role", "admin")])
        upstream.add("POST", "/static-data", {"success": False, "data": None, "message": "Duplicate code"})
        client.get("/static/role")

        response = client.post("/static-data", json=make_item("role", "admin"), headers=ADMIN_HEADERS)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["detail"] == "Duplicate code"
        assert client.get("/health").json()["checks"]["cache"]["cached_keys"] == ["role"]

    def test_unsuccessful_delete_is_bad_gateway(self, client, upstream):
        upstream.add("DELETE", "/static-data/3", {"success": False, "message": "In use"})
        response = client.delete("/static-data/3", headers=ADMIN_HEADERS)
        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    def test_unexpected_bulk_payload_is_bad_gateway(self, client, upstream):
        upstream.ok("GET", "/static", "role,gender")

        response = client.get("/static")

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert "Unexpected reference data payload" in response.json()["detail"]
        assert client.get("/health").json()["checks"]["cache"]["cached_keys"] == []
