import pytest

from luxe_estate.core.config import get_settings
from luxe_estate.services import google_auth


@pytest.fixture()
def verifier_calls(monkeypatch):
    calls = []

    def fake_verify(token, request, audience=None):
        calls.append({"token": token, "audience": audience})
        return {"sub": "google-1", "email": "gina@example.com", "email_verified": True}

    monkeypatch.setattr(google_auth.google_id_token, "verify_oauth2_token", fake_verify)
    return calls


class TestVerifyGoogleCredential:
    def test_checks_audience_against_client_id(self, verifier_calls):
        info = google_auth.verify_google_credential("id-token")
        assert info["email"] == "gina@example.com"
        assert verifier_calls == [{"token": "id-token", "audience": get_settings().GOOGLE_CLIENT_ID}]

    def test_unconfigured_client_id_fails_closed(self, monkeypatch, verifier_calls):
        """Without a client id no token is accepted, whatever app it was issued for."""
        monkeypatch.setattr(get_settings(), "GOOGLE_CLIENT_ID", "")
        with pytest.raises(google_auth.GoogleTokenError, match="not configured"):
            google_auth.verify_google_credential("id-token")
        assert verifier_calls == []

    def test_unconfigured_client_id_rejects_login(self, client, monkeypatch, verifier_calls):
        monkeypatch.setattr(get_settings(), "GOOGLE_CLIENT_ID", "")
        resp = client.post("/api/auth/google", json={"credential": "id-token"})
        assert resp.status_code == 401
        assert verifier_calls == []

    def test_unverified_email_rejected(self, monkeypatch):
        monkeypatch.setattr(
            google_auth.google_id_token,
            "verify_oauth2_token",
            lambda token, request, audience=None: {"email": "gina@example.com", "email_verified": False},
        )
        with pytest.raises(google_auth.GoogleTokenError):
            google_auth.verify_google_credential("id-token")

    def test_provider_rejection_is_wrapped(self, monkeypatch):
        def reject(token, request, audience=None):
            raise ValueError("Token has wrong audience")

        monkeypatch.setattr(google_auth.google_id_token, "verify_oauth2_token", reject)
        with pytest.raises(google_auth.GoogleTokenError, match="wrong audience"):
            google_auth.verify_google_credential("id-token")
