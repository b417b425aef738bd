# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Integration tests for POST /hash.

Assumptions:
- Fields arrive form-encoded in the body or the query string
- Errors: 405 wrong method, 400 bad body/missing fields/bad cost,
  500 when bcrypt refuses the cost
- Responses are {"success", "data"?, "error"?} JSON envelopes
"""
import pytest

from passhash.config import Settings
from passhash.hashing import check_password
from passhash.main import create_app


@pytest.mark.integration
def test_hash_success(client, fast_cost):
    """Test that a valid request returns a verifiable bcrypt hash."""
    response = client.post("/hash", data={"raw": "secret123", "cost": str(fast_cost)})
    
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    body = response.json()
    assert set(body) == {"success", "data"}
    assert body["success"] is True
    assert body["data"].startswith("$2b$04$")
    assert check_password("secret123", body["data"])


@pytest.mark.integration
def test_hash_fields_from_query_string(client):
    response = client.post("/hash", params={"raw": "secret123", "cost": "4"})
    
    assert response.status_code == 200
    assert check_password("secret123", response.json()["data"])


@pytest.mark.integration
@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_hash_wrong_method(client, method):
    """Test that any method but POST gets 405, whatever the body."""
    response = client.request(
        method,
        "/hash",
        content=b"raw=secret123&cost=4",
        headers={"content-type": "application/x-www-form-urlencoded"},
    )
    
    assert response.status_code == 405
    assert response.json() == {"success": False, "error": "Method not allowed"}


@pytest.mark.integration
def test_hash_head_is_405(client):
    response = client.head("/hash")
    
    assert response.status_code == 405


@pytest.mark.integration
def test_hash_malformed_body(client):
    response = client.post(
        "/hash",
        content=b"raw=%zz&cost=4",
        headers={"content-type": "application/x-www-form-urlencoded"},
    )
    
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid request"}


@pytest.mark.integration
@pytest.mark.parametrize("data", [
    {"cost": "4"},
    {"raw": "secret123"},
    {"raw": "", "cost": "4"},
    {"raw": "secret123", "cost": ""},
    {},
])
def test_hash_missing_params(client, data):
    response = client.post("/hash", data=data)
    
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing raw or cost params"}


@pytest.mark.integration
@pytest.mark.parametrize("cost", ["abc", "4.0", " 4", "1e3", "99999999999999999999"])
def test_hash_invalid_cost(client, cost):
    response = client.post("/hash", data={"raw": "secret123", "cost": cost})
    
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid cost"}


@pytest.mark.integration
def test_hash_cost_below_minimum_uses_default(client):
    """Test that a cost below bcrypt's minimum still succeeds at cost 10."""
    response = client.post("/hash", data={"raw": "secret123", "cost": "1"})
    
    assert response.status_code == 200
    assert response.json()["data"].startswith("$2b$10$")


@pytest.mark.integration
def test_hash_cost_above_bcrypt_maximum(client, request_logger):
    """Test that bcrypt refusing the cost is a 500 with a generic message.
    
    Assumptions:
    - The underlying cause is logged, not returned
    """
    response = client.post("/hash", data={"raw": "secret123", "cost": "32"})
    
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to generate hash"}
    [event] = request_logger.find("hash_generation_failed")
    assert event["cost"] == 32
    assert event["reason"]


@pytest.mark.integration
def test_hash_cost_above_configured_maximum(request_logger):
    """Test that MAX_COST turns large costs into 400 Invalid cost."""
    from fastapi.testclient import TestClient
    
    client = TestClient(create_app(settings=Settings(max_cost=5), logger=request_logger))
    
    accepted = client.post("/hash", data={"raw": "secret123", "cost": "5"})
    rejected = client.post("/hash", data={"raw": "secret123", "cost": "6"})
    
    assert accepted.status_code == 200
    assert rejected.status_code == 400
    assert rejected.json() == {"success": False, "error": "Invalid cost"}


@pytest.mark.integration
def test_hash_multipart_body(client):
    """Test that multipart form fields are accepted too."""
    response = client.post(
        "/hash",
        files={"raw": (None, "secret123"), "cost": (None, "4")},
    )
    
    assert response.status_code == 200
    assert check_password("secret123", response.json()["data"])


@pytest.mark.integration
def test_hash_request_is_logged_without_secrets(client, request_logger):
    """Test that start and completion are logged and nothing sensitive is."""
    response = client.post("/hash", data={"raw": "secret123", "cost": "4"})
    password_hash = response.json()["data"]
    
    assert request_logger.names() == ["request_started", "request_completed"]
    started, completed = request_logger.events
    assert started["method"] == "POST"
    assert started["path"] == "/hash"
    assert started["remote_addr"].startswith("testclient")
    assert completed["status_code"] == 200
    assert completed["duration_ms"] >= 0
    
    logged = repr(request_logger.events)
    assert "secret123" not in logged
    assert password_hash not in logged


@pytest.mark.integration
def test_wrong_method_is_logged(client, request_logger):
    client.get("/hash")
    
    assert request_logger.names() == ["request_started", "request_completed"]
    assert request_logger.events[1]["status_code"] == 405


@pytest.mark.integration
@pytest.mark.parametrize("path", ["/hash", "/verify"])
@pytest.mark.parametrize("method", ["TRACE", "CONNECT", "FOO"])
def test_uncommon_method_gets_envelope_and_is_logged(client, request_logger, path, method):
    """Test that any verb but POST, including custom ones, reaches the handler.
    
    Assumptions:
    - The 405 body is the JSON envelope, not the framework default
    - The logging wrapper records the request
    """
    response = client.request(method, path)
    
    assert response.status_code == 405
    assert response.json() == {"success": False, "error": "Method not allowed"}
    assert request_logger.names() == ["request_started", "request_completed"]
    assert request_logger.events[0]["method"] == method
    assert request_logger.events[1]["status_code"] == 405


@pytest.mark.integration
def test_hash_secret_longer_than_72_bytes(client, request_logger):
    """Test that an over-long secret is refused rather than truncated."""
    response = client.post("/hash", data={"raw": "x" * 100, "cost": "4"})
    
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to generate hash"}
    [event] = request_logger.find("hash_generation_failed")
    assert "x" * 100 not in repr(event)
