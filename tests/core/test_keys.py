import json

import pytest
from fastapi.testclient import TestClient

from eventops.core import security
from eventops.core.config import settings
from eventops.core.keys import check_keypair, generate_rsa_keypair, normalize_pem, to_env_value
from scripts import generate_keys


@pytest.fixture(scope="module")
def keypair():
    return generate_rsa_keypair()


@pytest.fixture
def rs256(monkeypatch, keypair):
    private_pem, public_pem = keypair
    monkeypatch.setattr(settings, "JWT_ALGORITHM", "RS256")
    # Keys from .env files usually carry escaped newlines
    monkeypatch.setattr(settings, "JWT_PRIVATE_KEY", to_env_value(private_pem))
    monkeypatch.setattr(settings, "JWT_PUBLIC_KEY", to_env_value(public_pem))
    monkeypatch.setattr(settings, "JWT_KEY_ID", "test-key")
    return keypair


class TestCheckKeypair:
    def test_valid_pair(self, keypair):
        result = check_keypair(*keypair)
        assert result.ok
        assert result.errors == []

    def test_mismatched_pair(self, keypair):
        other_private, _ = generate_rsa_keypair()
        result = check_keypair(other_private, keypair[1])
        assert not result.ok
        assert result.errors == ["Public key does not match the private key"]

    def test_wrong_format(self, keypair):
        result = check_keypair("not a key", keypair[1])
        assert result.errors == ["Private key is not a PEM encoded PKCS8 key"]

    def test_escaped_newlines_are_accepted(self, keypair):
        private_pem, public_pem = keypair
        assert normalize_pem(to_env_value(private_pem)) == private_pem
        assert check_keypair(to_env_value(private_pem), to_env_value(public_pem)).ok


class TestRS256Tokens:
    def test_token_round_trip(self, rs256):
        token = security.create_access_token(subject="user-1", role="organizer")
        claims = security.decode_access_token(token)
        assert claims["sub"] == "user-1"

    def test_jwks_endpoint(self, rs256, client: TestClient):
        response = client.get("/.well-known/jwks.json")
        assert response.status_code == 200
        key = response.json()["keys"][0]
        assert key["kid"] == "test-key"
        assert key["alg"] == "RS256"
        assert key["kty"] == "RSA"


def test_generate_keys_script(tmp_path, capsys):
    assert generate_keys.main([str(tmp_path), "script-key"]) == 0

    private_pem = (tmp_path / "jwt_private.pem").read_text()
    public_pem = (tmp_path / "jwt_public.pem").read_text()
    jwks = json.loads((tmp_path / "jwks.json").read_text())

    assert check_keypair(private_pem, public_pem).ok
    assert jwks["keys"][0]["kid"] == "script-key"
    assert "JWT_ALGORITHM=RS256" in capsys.readouterr().out
