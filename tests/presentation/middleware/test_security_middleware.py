"""Test HTTP middleware behaviour through the application"""

import pytest


@pytest.mark.asyncio
async def test_security_headers(client):
    response = await client.get("/api/timeline")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert "default-src 'none'" in response.headers["Content-Security-Policy"]
    # Plain http: no HSTS
    assert "Strict-Transport-Security" not in response.headers


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Correlation-ID": "req-123"})

    assert response.headers["X-Correlation-ID"] == "req-123"


@pytest.mark.asyncio
async def test_correlation_id_is_generated(client):
    response = await client.get("/health")

    assert response.headers["X-Correlation-ID"]


@pytest.mark.asyncio
async def test_oversized_body_rejected(client, auth_headers):
    response = await client.post(
        "/api/timeline",
        content=b"{}",
        headers={**auth_headers, "Content-Type": "application/json", "Content-Length": str(10 * 1024 * 1024)},
    )

    assert response.status_code == 413
    assert response.json()["error"] == "PAYLOAD_TOO_LARGE"


@pytest.mark.asyncio
async def test_invalid_content_length(client, auth_headers):
    response = await client.post(
        "/api/timeline",
        content=b"{}",
        headers={**auth_headers, "Content-Type": "application/json", "Content-Length": "abc"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_CONTENT_LENGTH"
