"""Tests for the Google OAuth helper (no network)."""

from unittest.mock import MagicMock, patch

import pytest


class TestRunOAuthFlow:
    """Test the browser flow wrapper."""

    def test_missing_client_file(self, tmp_path):
        from brand_brief.google_auth import run_oauth_flow
        from brand_brief.wizard.exceptions import CredentialError

        with pytest.raises(CredentialError) as exc_info:
            run_oauth_flow(tmp_path / "credentials.json", tmp_path / "token.json")
        assert exc_info.value.credential_type == "client_secret"

    def test_saves_token(self, tmp_path):
        from brand_brief.google_auth import GOOGLE_SCOPES, run_oauth_flow

        client_file = tmp_path / "credentials.json"
        client_file.write_text("{}")
        token_file = tmp_path / "nested" / "token.json"

        creds = MagicMock()
        creds.to_json.return_value = '{"token": "abc"}'
        flow = MagicMock()
        flow.run_local_server.return_value = creds

        with patch("google_auth_oauthlib.flow.InstalledAppFlow.from_client_secrets_file", return_value=flow) as mock_from:
            result = run_oauth_flow(client_file, token_file)

        mock_from.assert_called_once_with(str(client_file), GOOGLE_SCOPES)
        flow.run_local_server.assert_called_once_with(port=0)
        assert result is creds
        assert token_file.read_text() == '{"token": "abc"}'


class TestLoadOrRefreshCredentials:
    """Test token loading and refresh."""

    def test_missing_token(self, tmp_path):
        from brand_brief.google_auth import load_or_refresh_credentials
        from brand_brief.wizard.exceptions import CredentialError

        with pytest.raises(CredentialError) as exc_info:
            load_or_refresh_credentials(tmp_path / "token.json")
        assert exc_info.value.credential_type == "token"
        assert "brand-brief auth" in exc_info.value.remediation

    def test_invalid_token(self, tmp_path):
        from brand_brief.google_auth import load_or_refresh_credentials
        from brand_brief.wizard.exceptions import CredentialError

        token = tmp_path / "token.json"
        token.write_text("{}")
        with patch("google.oauth2.credentials.Credentials.from_authorized_user_file", side_effect=ValueError("bad")):
            with pytest.raises(CredentialError):
                load_or_refresh_credentials(token)

    def test_valid_token_returned(self, tmp_path):
        from brand_brief.google_auth import load_or_refresh_credentials

        token = tmp_path / "token.json"
        token.write_text("{}")
        creds = MagicMock(expired=False, valid=True)
        with patch("google.oauth2.credentials.Credentials.from_authorized_user_file", return_value=creds):
            assert load_or_refresh_credentials(token) is creds
        creds.refresh.assert_not_called()

    def test_expired_token_refreshed_and_saved(self, tmp_path):
        from brand_brief.google_auth import load_or_refresh_credentials

        token = tmp_path / "token.json"
        token.write_text("{}")
        creds = MagicMock(expired=True, refresh_token="r", valid=True)
        creds.to_json.return_value = '{"token": "new"}'
        with patch("google.oauth2.credentials.Credentials.from_authorized_user_file", return_value=creds):
            load_or_refresh_credentials(token)

        creds.refresh.assert_called_once()
        assert token.read_text() == '{"token": "new"}'

    def test_refresh_failure(self, tmp_path):
        from google.auth.exceptions import RefreshError

        from brand_brief.google_auth import load_or_refresh_credentials
        from brand_brief.wizard.exceptions import CredentialError

        token = tmp_path / "token.json"
        token.write_text("{}")
        creds = MagicMock(expired=True, refresh_token="r")
        creds.refresh.side_effect = RefreshError("revoked")
        with patch("google.oauth2.credentials.Credentials.from_authorized_user_file", return_value=creds):
            with pytest.raises(CredentialError) as exc_info:
                load_or_refresh_credentials(token)
        assert "revoked" in exc_info.value.details

    def test_expired_without_refresh_token(self, tmp_path):
        from brand_brief.google_auth import load_or_refresh_credentials
        from brand_brief.wizard.exceptions import CredentialError

        token = tmp_path / "token.json"
        token.write_text("{}")
        creds = MagicMock(expired=True, refresh_token=None, valid=False)
        with patch("google.oauth2.credentials.Credentials.from_authorized_user_file", return_value=creds):
            with pytest.raises(CredentialError):
                load_or_refresh_credentials(token)


class TestBuildServices:
    """Test client construction."""

    def test_builds_three_clients(self):
        from brand_brief.google_auth import build_services

        creds = MagicMock()
        with patch("googleapiclient.discovery.build") as mock_build:
            services = build_services(creds)

        names = [(c.args[0], c.args[1]) for c in mock_build.call_args_list]
        assert names == [("docs", "v1"), ("drive", "v3"), ("sheets", "v4")]
        assert services.docs is mock_build.return_value


class TestRefreshNetworkFailure:
    """Test transport errors during refresh."""

    def test_transport_error_is_network_error(self, tmp_path):
        from google.auth.exceptions import TransportError

        from brand_brief.google_auth import load_or_refresh_credentials
        from brand_brief.wizard.exceptions import NetworkError, get_error_code

        token = tmp_path / "token.json"
        token.write_text("{}")
        creds = MagicMock(expired=True, refresh_token="r")
        creds.refresh.side_effect = TransportError("connection reset")
        with patch("google.oauth2.credentials.Credentials.from_authorized_user_file", return_value=creds):
            with pytest.raises(NetworkError) as exc_info:
                load_or_refresh_credentials(token)
        assert get_error_code(exc_info.value) == 13
        assert token.read_text() == "{}"
