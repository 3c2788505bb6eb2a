"""Authenticator credential file loading."""

import json
import logging
from pathlib import Path
from typing import Any

from confirmator.errors import CredentialError
from confirmator.session.models import AccountCredentials, SessionData

logger = logging.getLogger(__name__)


def _parse_session(data: dict[str, Any] | None) -> SessionData:
    if not data:
        return SessionData()
    try:
        steam_id = int(data.get("SteamID") or 0)
    except (TypeError, ValueError) as e:
        raise CredentialError(f"Invalid SteamID in session block: {data.get('SteamID')!r}") from e
    return SessionData(
        steam_id=steam_id,
        session_id=data.get("SessionID") or "",
        steam_login=data.get("SteamLogin") or "",
        steam_login_secure=data.get("SteamLoginSecure") or "",
        oauth_token=data.get("OAuthToken") or "",
    )


def parse_credentials(data: dict[str, Any]) -> AccountCredentials:
    """Build credentials from a decoded authenticator document.

    Raises:
        CredentialError: Required fields are missing
    """
    if not isinstance(data, dict):
        raise CredentialError("Credential document must be a JSON object")

    session = _parse_session(data.get("Session"))
    account_name = data.get("account_name") or ""
    if not account_name and not session.steam_id:
        raise CredentialError("Credential file has neither account_name nor Session.SteamID")

    return AccountCredentials(
        account_name=account_name,
        shared_secret=data.get("shared_secret") or "",
        identity_secret=data.get("identity_secret") or "",
        device_id=data.get("device_id") or "",
        session=session,
        raw=data,
    )


def load_credentials(path: Path | str) -> AccountCredentials:
    """Read and parse a credential file.

    Args:
        path: Path to the authenticator JSON file

    Returns:
        Parsed credentials

    Raises:
        CredentialError: File missing, unreadable or malformed
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise CredentialError(f"File not found: {file_path}")

    try:
        with open(file_path, encoding="utf-8-sig") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CredentialError(f"Cannot read credential file {file_path}: {e}") from e

    credentials = parse_credentials(data)
    logger.debug(f"Loaded credentials for {credentials.identity} from {file_path}")
    return credentials
