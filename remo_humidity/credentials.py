"""Google OAuth credentials for read-only spreadsheet access.

Credentials are stored in ``token.json`` as an ``authorized_user`` object
that ``Credentials.from_authorized_user_info`` understands. When no usable
token file exists, the installed-app consent flow is run in a local browser
and the resulting refresh token is written next to the client id/secret from
``credentials.json``.
"""
import json
import logging

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from .const import DEFAULT_CREDENTIALS_PATH, DEFAULT_TOKEN_PATH, SCOPES

_LOGGER = logging.getLogger(__name__)


class AuthorizationError(Exception):
    pass


def load_saved(token_path: str = DEFAULT_TOKEN_PATH) -> Credentials | None:
    """Load previously saved credentials, or None if the file is missing or unreadable."""
    try:
        with open(token_path, encoding="utf-8") as fh:
            info = json.load(fh)
        return Credentials.from_authorized_user_info(info, SCOPES)
    except (OSError, ValueError, KeyError) as err:
        _LOGGER.debug("No saved credentials at %s: %s", token_path, err)
        return None


def save_credentials(
    credentials: Credentials,
    token_path: str = DEFAULT_TOKEN_PATH,
    credentials_path: str = DEFAULT_CREDENTIALS_PATH,
) -> None:
    """Write the refresh token together with the app's client id/secret."""
    with open(credentials_path, encoding="utf-8") as fh:
        keys = json.load(fh)
    key = keys.get("installed") or keys.get("web")
    if not key:
        raise AuthorizationError(f"{credentials_path} has no 'installed' or 'web' client")

    payload = {
        "type": "authorized_user",
        "client_id": key["client_id"],
        "client_secret": key["client_secret"],
        "refresh_token": credentials.refresh_token,
    }
    with open(token_path, "w", encoding="utf-8") as fh:
        json.dump(payload, fh)
    _LOGGER.info("Saved credentials to %s", token_path)


def authorize(
    token_path: str = DEFAULT_TOKEN_PATH,
    credentials_path: str = DEFAULT_CREDENTIALS_PATH,
) -> Credentials:
    """Return saved credentials, running the consent flow if there are none."""
    credentials = load_saved(token_path)
    if credentials:
        return credentials

    _LOGGER.info("No saved credentials; starting browser consent flow")
    try:
        flow = InstalledAppFlow.from_client_secrets_file(credentials_path, SCOPES)
        credentials = flow.run_local_server(port=0)
        if credentials:
            save_credentials(credentials, token_path, credentials_path)
    except AuthorizationError:
        raise
    except Exception as err:  # noqa: BLE001
        raise AuthorizationError(f"Google authorization failed: {err}") from err

    return credentials
