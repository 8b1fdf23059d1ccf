"""Environment variable assembly for new apps"""

import os
from typing import Iterable, Optional, Sequence

from ltc.constants import PROCESS_GUID_ENV


def ambient_environment() -> list[str]:
    """Snapshot the invoking shell's environment as raw NAME=VALUE strings."""
    return [f"{name}={value}" for name, value in os.environ.items()]


def parse_env_var_pair(env_var_pair: str) -> tuple[str, str]:
    """Split NAME=VALUE on the first '='; a bare NAME has an empty value."""
    name, _, value = env_var_pair.partition("=")
    return name, value


def grab_var_from_env(name: str, ambient_env: Sequence[str]) -> str:
    """
    Look up NAME in the ambient environment.

    Matches the first raw entry that starts with NAME, so "FOO" also
    matches "FOOBAR=x" when that entry comes first.
    """
    for env_var_pair in ambient_env:
        if env_var_pair.startswith(name):
            _, value = parse_env_var_pair(env_var_pair)
            return value
    return ""


def build_environment(
    env_vars: Iterable[str],
    app_name: str,
    ambient_env: Optional[Sequence[str]] = None,
) -> dict[str, str]:
    """
    Build the environment for an app.

    PROCESS_GUID is seeded with the app name. Each NAME=VALUE token is
    applied in order (last write wins). A token without a value takes the
    value from the ambient environment, or "" when it is not set there.

    Args:
        env_vars: Tokens from repeated --env flags
        app_name: Application name
        ambient_env: Raw NAME=VALUE strings (defaults to os.environ)

    Returns:
        Environment variables for the app
    """
    if ambient_env is None:
        ambient_env = ambient_environment()

    environment = {PROCESS_GUID_ENV: app_name}

    for env_var_pair in env_vars:
        name, value = parse_env_var_pair(env_var_pair)

        if value == "":
            value = grab_var_from_env(name, ambient_env)

        environment[name] = value

    return environment
