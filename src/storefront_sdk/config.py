from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

ENV_PREFIX = "STOREFRONT_"
TRUTHY = frozenset({"1", "true", "yes", "on"})

N = TypeVar("N", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 3
    retry_backoff_seconds: float = 0.3
    max_connections: int = 20
    verify_ssl: bool = True
    app_name: str = "storefront"


def _env(key: str) -> str:
    return (os.getenv(ENV_PREFIX + key) or "").strip()


def _number(key: str, cast: Callable[[str], N], default: N, *, minimum: N, inclusive: bool = True) -> N:
    raw = _env(key)
    name = ENV_PREFIX + key
    if not raw:
        value = default
    else:
        try:
            value = cast(raw)
        except ValueError as exc:
            kind = "an integer" if cast is int else "a number"
            raise ConfigError(f"Invalid {name}: expected {kind}, got {raw!r}") from exc
    in_range = value >= minimum if inclusive else value > minimum
    if not in_range:
        bound = ">=" if inclusive else ">"
        raise ConfigError(f"Invalid {name}: expected {bound} {minimum}, got {value}")
    return value


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build a :class:`ClientConfig` from ``STOREFRONT_*`` variables.

    ``STOREFRONT_API_BASE_URL_<ENV>`` wins over ``STOREFRONT_API_BASE_URL`` so one
    ``.env`` file can hold several environments. ``STOREFRONT_TIMEOUT_SECONDS``
    seeds the connect and read timeouts unless those are set on their own.
    """
    load_dotenv(env_file)

    env_name = _env("ENV") or "dev"
    api_base_url = _env(f"API_BASE_URL_{env_name.upper()}") or _env("API_BASE_URL")
    if not api_base_url:
        raise ConfigError(f"Missing required config values: {ENV_PREFIX}API_BASE_URL")

    timeout = _number("TIMEOUT_SECONDS", float, 10.0, minimum=0.0, inclusive=False)
    connect_timeout = _number("CONNECT_TIMEOUT_SECONDS", float, min(timeout, 5.0), minimum=0.0, inclusive=False)
    read_timeout = _number("READ_TIMEOUT_SECONDS", float, max(timeout, connect_timeout), minimum=0.0, inclusive=False)

    verify_raw = _env("VERIFY_SSL")
    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=read_timeout,
        retries=_number("RETRIES", int, 3, minimum=0),
        retry_backoff_seconds=_number("RETRY_BACKOFF_SECONDS", float, 0.3, minimum=0.0),
        max_connections=_number("MAX_CONNECTIONS", int, 20, minimum=1),
        verify_ssl=verify_raw.lower() in TRUTHY if verify_raw else True,
        app_name=_env("APP_NAME") or "storefront",
    )
