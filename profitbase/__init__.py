"""Thin client for the Profitbase real-estate CRM API.

This package provides:
- Authentication with an API key and transparent access-token refresh
- Request throttling with a configurable minimum interval
- Query-string encoding for scalar and array parameters
- One method per Profitbase REST endpoint, returning raw responses
"""

from profitbase.client import ProfitbaseClient
from profitbase.exceptions import (
    ClientInitializationError,
    ConfigurationError,
    HttpClientRuntimeError,
    ProfitbaseError,
    TokenRequestError,
)
from profitbase.query import build_query_string

__all__ = [
    "ProfitbaseClient",
    "build_query_string",
    "ProfitbaseError",
    "ClientInitializationError",
    "TokenRequestError",
    "HttpClientRuntimeError",
    "ConfigurationError",
]
