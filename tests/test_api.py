"""
Integration tests for the HTTP API (monocipher/main.py and monocipher/api/).
"""
import pytest
from fastapi.testclient import TestClient

from monocipher.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_config(client):
    response = client.get("/api/v1/config")
    assert response.status_code == 200
    assert response.json() == {
        "alphabet_size": 62,
        "include_slash": False,
        "sku_prefix": "si",
        "sku_separator": "@",
        "prefixes": ["ms", "si", "ys"],
    }


def test_config_does_not_expose_key(client, set_env):
    set_env(MONO_CIPHER_KEY="TOP_SECRET")
    assert "TOP_SECRET" not in client.get("/api/v1/config").text


# ---------------------------------------------------------
# Cipher endpoints
# ---------------------------------------------------------

def test_encrypt_default_key(client):
    response = client.post("/api/v1/cipher/encrypt", json={"text": "Hello123World"})
    assert response.status_code == 200
    assert response.json() == {"text": "Hello123World", "result": "OW99GVuHdGs9X"}


def test_decrypt_with_key(client):
    response = client.post(
        "/api/v1/cipher/decrypt",
        json={"text": "MPDmYmAqD0VNqmAixa", "secret_key": "TEST_KEY"},
    )
    assert response.status_code == 200
    assert response.json()["result"] == "ConsistencyTest123"


def test_encrypt_requires_text(client):
    response = client.post("/api/v1/cipher/encrypt", json={})
    assert response.status_code == 422


def test_consistency_default_sample(client):
    response = client.post("/api/v1/cipher/consistency", json={})
    assert response.status_code == 200
    assert response.json() == {"consistent": True, "sample_text": "Test123abcXYZ"}


def test_consistency_custom_sample(client):
    response = client.post(
        "/api/v1/cipher/consistency",
        json={"text": "any/text!", "secret_key": "K"},
    )
    assert response.json() == {"consistent": True, "sample_text": "any/text!"}


def test_cipher_info(client):
    response = client.get("/api/v1/cipher/info")
    assert response.status_code == 200
    assert response.json() == {
        "alphabet_size": 62,
        "forward_size": 62,
        "inverse_size": 62,
        "is_complete": True,
        "sample_mappings": {"a": "e", "A": "T", "0": "1"},
    }


def test_cipher_info_with_key(client):
    default = client.get("/api/v1/cipher/info").json()
    other = client.get("/api/v1/cipher/info", params={"secret_key": "KEY_ONE"}).json()
    assert other["is_complete"]
    assert other["sample_mappings"] != default["sample_mappings"]


# ---------------------------------------------------------
# SKU endpoints
# ---------------------------------------------------------

def test_generate_sku(client):
    response = client.post(
        "/api/v1/sku/generate",
        json={"product_id": "S5smas8TFSWpJUso6Ro3vK", "prefix": "si"},
    )
    assert response.status_code == 200
    assert response.json() == {"sku": "si@p68Be8JyopdUt28GjSGHfz", "prefix": "si"}


def test_generate_sku_default_prefix(client):
    response = client.post("/api/v1/sku/generate", json={"product_id": "m12345678"})
    assert response.json() == {"sku": "si@BVuH06jcJ", "prefix": "si"}


def test_generate_sku_bad_prefix(client):
    response = client.post(
        "/api/v1/sku/generate",
        json={"product_id": "m12345678", "prefix": "a@b"},
    )
    assert response.status_code == 400
    assert "must not contain" in response.json()["detail"]


def test_decode_sku(client):
    response = client.post("/api/v1/sku/decode", json={"sku": "si@p68Be8JyopdUt28GjSGHfz"})
    assert response.status_code == 200
    assert response.json() == {
        "prefix": "si",
        "product_id": "S5smas8TFSWpJUso6Ro3vK",
        "type": "monoalphabetic",
    }


def test_decode_sku_malformed(client):
    response = client.post("/api/v1/sku/decode", json={"sku": "nothing"})
    assert response.status_code == 400


def test_resolve_sku(client):
    response = client.post("/api/v1/sku/resolve", json={"sku": "si@BVuH06jcJ"})
    assert response.status_code == 200
    assert response.json() == {
        "url": "https://jp.mercari.com/item/mm12345678",
        "prefix": "si",
        "product_id": "m12345678",
    }


def test_resolve_sku_unknown_prefix(client):
    response = client.post("/api/v1/sku/resolve", json={"sku": "zz@BVuH06jcJ"})
    assert response.status_code == 400
    assert "Unknown SKU prefix" in response.json()["detail"]


def test_sku_round_trip_with_key(client):
    sku = client.post(
        "/api/v1/sku/generate",
        json={"product_id": "growdetradingltd/falr61105b147", "prefix": "ys", "secret_key": "CUSTOM_KEY"},
    ).json()["sku"]
    decoded = client.post(
        "/api/v1/sku/decode",
        json={"sku": sku, "secret_key": "CUSTOM_KEY"},
    ).json()
    assert decoded["product_id"] == "growdetradingltd/falr61105b147"


# ---------------------------------------------------------
# Error responses
# ---------------------------------------------------------

@pytest.mark.parametrize("path", ["/api/v1/sku/generate", "/api/v1/sku/decode", "/api/v1/sku/resolve"])
def test_sku_endpoints_document_400(path):
    """SKU endpoints declare ErrorResponse for their 400 responses."""
    responses = app.openapi()["paths"][path]["post"]["responses"]
    schema = responses["400"]["content"]["application/json"]["schema"]
    assert schema == {"$ref": "#/components/schemas/ErrorResponse"}


def test_error_response_schema():
    """The documented error body is a single detail string."""
    schema = app.openapi()["components"]["schemas"]["ErrorResponse"]
    assert schema["required"] == ["detail"]
    assert schema["properties"]["detail"]["type"] == "string"


def test_decode_sku_malformed_body(client):
    """A 400 body carries only the detail message."""
    response = client.post("/api/v1/sku/decode", json={"sku": "nothing"})
    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid SKU format: missing '@' separator"}


def test_config_missing_site_map(client, set_env, tmp_path):
    """A site map that cannot be read gives a 500 naming the file."""
    path = tmp_path / "missing.json"
    set_env(SITE_MAP_PATH=str(path))
    response = client.get("/api/v1/config")
    assert response.status_code == 500
    assert str(path) in response.json()["detail"]


def test_resolve_sku_invalid_site_map(client, set_env, tmp_path):
    path = tmp_path / "sites.json"
    path.write_text("{not json", encoding="utf-8")
    set_env(SITE_MAP_PATH=str(path))
    response = client.post("/api/v1/sku/resolve", json={"sku": "si@BVuH06jcJ"})
    assert response.status_code == 400
    assert response.json()["detail"].startswith(f"Site map '{path}' is not valid JSON")
