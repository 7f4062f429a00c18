from __future__ import annotations

import pathlib
from typing import Final

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2.service_account import Credentials as _SvcCreds
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ._errors import InitializationError

__all__ = [
    "api_key_session",
    "service_account_session"
]

SCOPES: Final[list[str]] = [
    "https://www.googleapis.com/auth/youtube.readonly",
]

def _build_session(session: requests.Session) -> requests.Session:
    """Mount an adapter with retries switched off.

    Upstream failures surface to the caller on the first attempt; whether to
    try again is the caller's decision.
    """
    retry_policy = Retry(total=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry_policy)
    for scheme in ("https://", "http://"):
        session.mount(scheme, adapter)
    return session

def api_key_session(api_key: str) -> requests.Session:
    """Create a session that sends *api_key* as the ``key`` query parameter."""
    if not isinstance(api_key, str):
        raise InitializationError(f"API key must be a string, got {type(api_key).__name__}")
    if not api_key.strip():
        raise InitializationError("API key cannot be empty")
    if any(ch.isspace() for ch in api_key):
        raise InitializationError("API key must not contain whitespace")

    session = requests.Session()
    session.params = {"key": api_key}
    return _build_session(session)

def service_account_session(json_path: str | pathlib.Path) -> AuthorizedSession:
    """Create an AuthorizedSession from a service‑account key."""
    path = pathlib.Path(json_path).expanduser()
    try:
        creds = _SvcCreds.from_service_account_file(str(path), scopes=SCOPES)
    except (OSError, ValueError, GoogleAuthError) as exc:
        raise InitializationError(f"error loading service account key {path}: {exc}") from exc
    return _build_session(AuthorizedSession(creds))
