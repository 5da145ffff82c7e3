from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any

import requests

from profitbase.auth import AUTH_PATH, TokenSession, build_auth_body, extract_access_token
from profitbase.endpoints import EndpointsMixin
from profitbase.exceptions import (
    ClientInitializationError,
    HttpClientRuntimeError,
    ProfitbaseError,
    TokenRequestError,
)
from profitbase.query import QueryParams, build_query_string
from profitbase.throttle import DEFAULT_MIN_INTERVAL, ThrottleGate
from profitbase.transport import Transport, build_transport_config
from profitbase.utils.env import DEFAULT_ENV_FILE, load_setting

logger = logging.getLogger(__name__)

TOKEN_EXPIRED_STATUS = 403


class SendStatus(Enum):
    OK = auto()
    EXPIRED = auto()
    FAULT = auto()


@dataclass(frozen=True)
class SendOutcome:
    """Result of a single throttled transport call."""

    status: SendStatus
    response: requests.Response | None = None
    error: Exception | None = None


class ProfitbaseClient(EndpointsMixin):
    """Profitbase API client.

    Constructing a client authenticates immediately, so an instance always
    holds an access token. The token is sent as the ``access_token`` query
    parameter on every request. A 403 response is taken as token expiry: the
    client refreshes the token and retries that request once.

    Responses are returned untouched, including 4xx/5xx ones; callers
    interpret status codes themselves.

    A client is not thread-safe. The access token and the throttle timestamp
    are updated without locking, so share an instance across threads only
    with external synchronisation.
    """

    def __init__(
        self,
        transport: Transport,
        api_key: str,
        min_interval: float = DEFAULT_MIN_INTERVAL,
    ) -> None:
        self.transport = transport
        self.session = TokenSession(api_key=api_key)
        self.throttle = ThrottleGate(min_interval)
        self.refresh()

    @classmethod
    def create(
        cls,
        api_key: str,
        base_endpoint: str,
        transport_config: dict[str, Any] | None = None,
    ) -> ProfitbaseClient:
        """Build a transport for ``base_endpoint`` and authenticate.

        Args:
            api_key: Profitbase API key (``pb_api_key``).
            base_endpoint: API root, e.g. ``https://pb1234.profitbase.ru/api/v4/json``.
            transport_config: Overrides merged onto the default transport
                settings (``connect_timeout``, ``timeout``, ``headers``, ...).

        Raises:
            ClientInitializationError: The transport could not be built.
            TokenRequestError: The initial authentication failed.
        """
        try:
            config = build_transport_config(base_endpoint, transport_config)
            transport = Transport.from_config(config)
        except Exception as e:
            raise ClientInitializationError("Failed to initialize HTTP client") from e

        try:
            return cls(transport, api_key)
        except TokenRequestError:
            transport.close()
            raise

    @classmethod
    def from_env(
        cls,
        api_key_env: str = "PROFITBASE_API_KEY",
        endpoint_env: str = "PROFITBASE_ENDPOINT",
        transport_config: dict[str, Any] | None = None,
        dotenv: bool = True,
        env_file: str | Path = DEFAULT_ENV_FILE,
    ) -> ProfitbaseClient:
        """Create a client from settings in the environment or ``env_file``."""
        api_key = load_setting(api_key_env, dotenv=dotenv, path=env_file)
        endpoint = load_setting(endpoint_env, dotenv=dotenv, path=env_file)
        return cls.create(api_key, endpoint, transport_config)

    @property
    def api_key(self) -> str:
        return self.session.api_key

    @property
    def access_token(self) -> str | None:
        return self.session.access_token

    def set_min_request_interval(self, seconds: float) -> None:
        """Set the minimum number of seconds between requests; 0 disables throttling."""
        self.throttle.min_interval = seconds

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def authenticate(self, api_key: str) -> requests.Response:
        """POST the API key to the authentication endpoint.

        The response is returned whatever its status; a 403 here is not
        treated as token expiry.
        """
        outcome = self._send("POST", AUTH_PATH, body=build_auth_body(api_key), with_token=False)
        if outcome.status is SendStatus.FAULT:
            raise HttpClientRuntimeError(
                "Unexpected error occurred during HTTP request"
            ) from outcome.error
        return outcome.response

    def fetch_access_token(self, api_key: str) -> str:
        try:
            response = self.authenticate(api_key)
            return extract_access_token(response)
        except ProfitbaseError as e:
            raise TokenRequestError("Failed to obtain access token from Profitbase API") from e

    def refresh(self) -> None:
        """Fetch a new access token and replace the stored one.

        Raises TokenRequestError if authentication fails; the previous token
        is kept in that case.
        """
        token = self.fetch_access_token(self.session.api_key)
        self.session.replace_token(token)
        logger.info("Obtained Profitbase access token")

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------
    def request(
        self,
        method: str,
        path: str,
        query_params: QueryParams | None = None,
        body: dict[str, Any] | None = None,
        retry: bool = False,
    ) -> requests.Response:
        """Send an authenticated request and return the raw response.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the base URL.
            query_params: Query parameters; list values become repeated keys.
            body: JSON body, sent only when non-empty.
            retry: Mark the call as a retry already, so a 403 fails instead of
                triggering a token refresh.

        Raises:
            HttpClientRuntimeError: The token expired and could not be
                refreshed, expired again after the retry, or the transport
                failed.
        """
        is_retry = retry
        while True:
            outcome = self._send(method, path, query_params, body)

            if outcome.status is SendStatus.OK:
                return outcome.response

            if outcome.status is SendStatus.FAULT:
                logger.error(f"{method} {path} failed: {outcome.error}")
                raise HttpClientRuntimeError(
                    "Unexpected error occurred during HTTP request"
                ) from outcome.error

            # Release the pooled connection held by the unread 403 body.
            outcome.response.close()
            if is_retry:
                raise HttpClientRuntimeError("Access token expired and refresh failed")

            logger.warning(f"Access token expired on {method} {path}, refreshing")
            try:
                self.refresh()
            except TokenRequestError as e:
                raise HttpClientRuntimeError("Failed to refresh access token") from e
            is_retry = True

    def _build_request_options(
        self,
        query_params: QueryParams | None,
        body: dict[str, Any] | None,
        with_token: bool = True,
    ) -> dict[str, Any]:
        params = dict(query_params or {})
        if with_token and self.session.access_token is not None:
            params["access_token"] = self.session.access_token

        options: dict[str, Any] = {}
        if body:
            options["json"] = body
        if params:
            options["query"] = build_query_string(params)
        return options

    def _send(
        self,
        method: str,
        path: str,
        query_params: QueryParams | None = None,
        body: dict[str, Any] | None = None,
        with_token: bool = True,
    ) -> SendOutcome:
        self.throttle.wait()
        options = self._build_request_options(query_params, body, with_token=with_token)
        try:
            response = self.transport.send(method, path, **options)
        except Exception as e:
            return SendOutcome(SendStatus.FAULT, error=e)
        self.throttle.record()

        if response.status_code == TOKEN_EXPIRED_STATUS:
            return SendOutcome(SendStatus.EXPIRED, response=response)
        return SendOutcome(SendStatus.OK, response=response)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> ProfitbaseClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
