from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}

DEFAULT_TRANSPORT_CONFIG: dict[str, Any] = {
    "connect_timeout": 5,
    "timeout": 10,
    "headers": DEFAULT_HEADERS,
    "http_errors": False,
    "stream": True,
    "retries": 0,
    "backoff": 0.5,
}

# Options stored on the session itself rather than sent with each request.
SESSION_OPTIONS = ("verify", "cert", "proxies", "trust_env", "max_redirects")


def normalize_base_url(base_endpoint: str) -> str:
    return base_endpoint.rstrip("/") + "/"


def build_transport_config(
    base_endpoint: str, overrides: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Merge caller overrides onto the default transport settings.

    Overrides win key by key; a ``headers`` override replaces the default
    headers as a whole. The base URL always ends with ``/`` so relative
    endpoint paths resolve below it. Keys outside the defaults are kept and
    handed to ``requests`` by the transport (``verify``, ``proxies``,
    ``allow_redirects``, ...).
    """
    config = {**DEFAULT_TRANSPORT_CONFIG, "base_url": base_endpoint}
    config.update(overrides or {})
    config["base_url"] = normalize_base_url(config["base_url"])
    config["headers"] = dict(config["headers"])
    return config


def _session_with_retries(total: int = 0, backoff: float = 0.5) -> requests.Session:
    # Connection-level retries only; every status code reaches the client.
    sess = requests.Session()
    retries = Retry(
        total=total,
        connect=total,
        read=0,
        status=0,
        backoff_factor=backoff,
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retries)
    sess.mount("http://", adapter)
    sess.mount("https://", adapter)
    return sess


class Transport:
    """HTTP transport bound to one Profitbase base URL.

    Non-2xx responses are returned as-is unless ``http_errors`` is enabled.
    Extra keyword options are passed to ``requests``: names listed in
    ``SESSION_OPTIONS`` are set on the session, the rest go along with each
    ``session.request`` call.
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        connect_timeout: float = 5,
        timeout: float = 10,
        http_errors: bool = False,
        stream: bool = True,
        retries: int = 0,
        backoff: float = 0.5,
        session: requests.Session | None = None,
        **options: Any,
    ) -> None:
        self.base_url = normalize_base_url(base_url)
        self.connect_timeout = connect_timeout
        self.timeout = timeout
        self.http_errors = http_errors
        self.stream = stream
        self.session = session or _session_with_retries(total=retries, backoff=backoff)
        self.session.headers.update(DEFAULT_HEADERS if headers is None else headers)

        for name in SESSION_OPTIONS:
            if name in options:
                setattr(self.session, name, options.pop(name))
        self.request_options = options

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> Transport:
        return cls(**config)

    def url_for(self, path: str) -> str:
        return urljoin(self.base_url, path)

    def send(
        self,
        method: str,
        path: str,
        *,
        query: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> requests.Response:
        """Send one request; ``query`` is an already encoded query string."""
        res = self.session.request(
            method,
            self.url_for(path),
            params=query,
            json=json,
            timeout=(self.connect_timeout, self.timeout),
            stream=self.stream,
            **self.request_options,
        )
        logger.debug(f"{method} {path} -> {res.status_code}")
        if self.http_errors:
            res.raise_for_status()
        return res

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
