from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests

from profitbase.exceptions import TokenRequestError

AUTH_PATH = "authentication"
APP_TYPE = "api-app"


@dataclass
class TokenSession:
    """Credential state owned by a single client.

    ``access_token`` stays ``None`` until the first successful
    authentication and afterwards always holds the token from the most
    recent one. Only :meth:`replace_token` writes it.
    """

    api_key: str = field(repr=False)
    access_token: str | None = field(default=None, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def replace_token(self, token: str) -> None:
        self.access_token = token


def build_auth_body(api_key: str) -> dict[str, Any]:
    return {"credentials": {"pb_api_key": api_key}, "type": APP_TYPE}


def extract_access_token(response: requests.Response) -> str:
    """Return the access token from an authentication response.

    Raises TokenRequestError if the status is not 200, the body is not JSON,
    or the body carries no usable ``access_token``.
    """
    if response.status_code != 200:
        raise TokenRequestError(
            f"Access token request failed with status {response.status_code}"
        )
    try:
        data = response.json()
    except ValueError as e:
        raise TokenRequestError("Access token response is not valid JSON") from e

    token = data.get("access_token") if isinstance(data, dict) else None
    if not token or not isinstance(token, str):
        raise TokenRequestError("Authentication succeeded but access_token missing in response")
    return token
