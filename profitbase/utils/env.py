from __future__ import annotations

import os
from pathlib import Path

from profitbase.exceptions import ConfigurationError

DEFAULT_ENV_FILE = ".env"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _parse_env_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip().removeprefix("export ").strip()
    if not key:
        return None
    return key, _unquote(value.strip())


def load_env_file_if_present(
    path: str | Path = DEFAULT_ENV_FILE, override: bool = False
) -> dict[str, str]:
    """Load KEY=VALUE pairs from a .env file if present.

    Keeps ``PROFITBASE_API_KEY`` and ``PROFITBASE_ENDPOINT`` in a local file
    without pulling in python-dotenv. Shell-style ``export KEY=value`` lines
    are accepted and one pair of matching quotes is stripped from values.

    Returns the parsed pairs. ``os.environ`` is updated too; keys that are
    already set are left alone unless ``override`` is true.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return {}

    loaded: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        pair = _parse_env_line(line)
        if pair is None:
            continue
        key, value = pair
        loaded[key] = value
        if override or key not in os.environ:
            os.environ[key] = value
    return loaded


def load_setting(
    env_key: str, dotenv: bool = True, path: str | Path = DEFAULT_ENV_FILE
) -> str:
    """Return a required setting from the environment or the .env file at ``path``.

    Raises ConfigurationError if missing or empty.
    """
    if dotenv:
        load_env_file_if_present(path)
    value = os.getenv(env_key)
    if not value:
        raise ConfigurationError(f"Missing setting. Set {env_key} in environment or {path}")
    return value
