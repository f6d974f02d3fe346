"""
Brand Brief Google Authentication Helper

OAuth browser flow, token loading/refresh, and construction of the Docs,
Drive and Sheets API clients used to submit a brief.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from brand_brief.wizard.exceptions import CredentialError, NetworkError
from brand_brief.wizard.logging_config import get_logger


logger = get_logger("google_auth")

# Scopes required to copy the template, fill it, share it and append the row
GOOGLE_SCOPES = [
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/spreadsheets",
]


@dataclass
class GoogleServices:
    """Authorized API clients."""
    docs: Any
    drive: Any
    sheets: Any


def run_oauth_flow(
    credentials_path: Path,
    token_path: Path,
    scopes: Optional[list] = None,
    port: int = 0,
):
    """Run the Google OAuth browser flow and save the resulting token.

    Args:
        credentials_path: Path to the OAuth client credentials.json file.
        token_path: Path where token.json will be saved.
        scopes: OAuth scopes (defaults to GOOGLE_SCOPES).
        port: Local server port (0 = auto-select).

    Returns:
        The authorized google.oauth2.credentials.Credentials object.

    Raises:
        CredentialError: If the client credentials file is missing.
    """
    from google_auth_oauthlib.flow import InstalledAppFlow

    if not credentials_path.exists():
        raise CredentialError(
            f"OAuth client file not found: {credentials_path}",
            credential_type="client_secret",
            remediation="Download the OAuth client JSON from Google Cloud Console and set BRAND_BRIEF_CREDENTIALS"
        )

    flow = InstalledAppFlow.from_client_secrets_file(
        str(credentials_path),
        scopes or GOOGLE_SCOPES,
    )
    creds = flow.run_local_server(port=port)

    token_path.parent.mkdir(parents=True, exist_ok=True)
    token_path.write_text(creds.to_json())
    logger.info("Saved Google token to %s", token_path)

    return creds


def load_or_refresh_credentials(
    token_path: Path,
    scopes: Optional[list] = None,
):
    """Load an existing token and refresh it if expired.

    Does NOT open a browser.

    Args:
        token_path: Path to token.json.
        scopes: OAuth scopes (defaults to GOOGLE_SCOPES).

    Returns:
        Valid google.oauth2.credentials.Credentials object.

    Raises:
        CredentialError: If the token is missing, invalid or can't be refreshed.
        NetworkError: If Google cannot be reached during the refresh.
    """
    from google.auth.exceptions import RefreshError, TransportError
    from google.auth.transport.requests import Request
    from google.oauth2.credentials import Credentials

    if not token_path.exists():
        raise CredentialError(f"Token file not found: {token_path}", credential_type="token")

    try:
        creds = Credentials.from_authorized_user_file(str(token_path), scopes or GOOGLE_SCOPES)
    except ValueError as e:
        raise CredentialError("Stored Google token is invalid", credential_type="token", details=str(e)) from e

    if creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except RefreshError as e:
            raise CredentialError("Google token could not be refreshed", credential_type="token", details=str(e)) from e
        except TransportError as e:
            raise NetworkError("Could not reach Google to refresh the token", endpoint="oauth2.googleapis.com", details=str(e)) from e
        token_path.write_text(creds.to_json())
        logger.debug("Refreshed Google token")

    if not creds.valid:
        raise CredentialError("Google token is expired and has no refresh token", credential_type="token")

    return creds


def build_services(credentials) -> GoogleServices:
    """Build the Docs, Drive and Sheets clients from authorized credentials."""
    from googleapiclient.discovery import build

    return GoogleServices(
        docs=build("docs", "v1", credentials=credentials, cache_discovery=False),
        drive=build("drive", "v3", credentials=credentials, cache_discovery=False),
        sheets=build("sheets", "v4", credentials=credentials, cache_discovery=False),
    )
