"""Query string encoding for Profitbase endpoints.

Profitbase expects array parameters as repeated keys (``ids[]=1&ids[]=2``)
and booleans/nulls spelled out as ``true``, ``false`` and ``null``.
``urlencode`` on its own renders ``True`` and ``None`` the Python way, so
values are normalised first.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Union
from urllib.parse import quote_plus, urlencode

Scalar = Union[str, int, float, bool, None]
QueryParams = Mapping[str, Union[Scalar, Sequence[Scalar]]]


def build_query_string(params: QueryParams) -> str:
    """Encode ``params`` into a query string.

    Single-valued parameters come first, in input order, followed by every
    list-valued parameter expanded into one ``key=value`` pair per element.

    Examples:
        >>> build_query_string({"a": 1, "b": "x"})
        'a=1&b=x'
        >>> build_query_string({"ids[]": [1, 2], "active": True})
        'active=true&ids%5B%5D=1&ids%5B%5D=2'
    """
    single, multi = _split_params(params)
    parts = [_encode_single(single), _encode_multi(multi)]
    return "&".join(part for part in parts if part)


def to_query_value(value: Any) -> str:
    """Render one parameter value; whole floats drop the fraction (``2.0`` -> ``"2"``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_multi(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _split_params(params: QueryParams) -> tuple[dict[str, Scalar], dict[str, Sequence[Scalar]]]:
    single = {key: value for key, value in params.items() if not _is_multi(value)}
    multi = {key: value for key, value in params.items() if _is_multi(value)}
    return single, multi


def _encode_single(params: Mapping[str, Scalar]) -> str:
    return urlencode({key: to_query_value(value) for key, value in params.items()})


def _encode_multi(params: Mapping[str, Sequence[Scalar]]) -> str:
    pairs = []
    for key, values in params.items():
        for value in values:
            pairs.append(f"{quote_plus(key)}={quote_plus(to_query_value(value))}")
    return "&".join(pairs)
