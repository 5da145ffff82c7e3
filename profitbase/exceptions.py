from __future__ import annotations


class ProfitbaseError(RuntimeError):
    """Base class for all Profitbase client errors."""

    pass


class ClientInitializationError(ProfitbaseError):
    """Raised when the HTTP transport cannot be constructed."""

    pass


class TokenRequestError(ProfitbaseError):
    """Raised when an access token cannot be obtained from the API."""

    pass


class HttpClientRuntimeError(ProfitbaseError):
    """Raised when a request cannot be completed."""

    pass


class ConfigurationError(ProfitbaseError):
    """Raised when a required setting is missing from the environment or .env."""

    pass
