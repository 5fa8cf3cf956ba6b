"""HTTP helper utilities for tests."""

from __future__ import annotations

API = "/api/v1"
AUTH = f"{API}/auth"


def json_headers(auth_token: str | None = None) -> dict[str, str]:
    """Return standard JSON headers.

    Parameters
    ----------
    auth_token:
        Optional bearer token to include.

    Returns
    -------
    dict[str, str]
        HTTP headers dictionary.
    """

    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


def link_token(html_body: str, marker: str = "/verify-email/") -> str:
    """Extract the verification token from a mailed link."""

    start = html_body.index(marker) + len(marker)
    end = html_body.index('"', start)
    return html_body[start:end]
