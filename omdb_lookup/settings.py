from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from omdb_lookup.utils.env import env_str, load_env

OMDB_API_BASE_URL = "https://www.omdbapi.com/"
DEFAULT_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class OmdbSettings:
    """
    Process-wide defaults for OMDb calls.

    Every lookup accepts an explicit `api_key`; this only supplies the fallback.
    """

    api_key: str | None = None
    base_url: str = OMDB_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> OmdbSettings:
        load_env()
        return cls(
            api_key=env_str("OMDB_API_KEY"),
            base_url=env_str("OMDB_BASE_URL") or OMDB_API_BASE_URL,
            timeout_seconds=_parse_timeout(env_str("OMDB_TIMEOUT_SECONDS")),
        )


def _parse_timeout(raw: str | None) -> float:
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"OMDB_TIMEOUT_SECONDS must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"OMDB_TIMEOUT_SECONDS must be positive, got {raw!r}")
    return value


_settings: OmdbSettings | None = None


def get_settings() -> OmdbSettings:
    global _settings
    if _settings is None:
        _settings = OmdbSettings.from_env()
    return _settings


def configure(settings: OmdbSettings | None = None, **overrides: Any) -> OmdbSettings:
    """
    Install the process-wide default settings.

    `configure(api_key="...")` keeps whatever is already resolved and swaps the key;
    `configure(OmdbSettings(...))` replaces the defaults wholesale.
    """

    global _settings
    base = settings if settings is not None else get_settings()
    _settings = replace(base, **overrides) if overrides else base
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None


def resolve_api_key(api_key: str | None = None, *, settings: OmdbSettings | None = None) -> str | None:
    """
    Best-effort API key resolution for callers that want to continue when the key is missing.
    """

    if api_key is not None and api_key.strip():
        return api_key.strip()
    resolved = (settings or get_settings()).api_key
    return resolved.strip() if resolved and resolved.strip() else None


def require_api_key(api_key: str | None = None, *, settings: OmdbSettings | None = None) -> str:
    resolved = resolve_api_key(api_key, settings=settings)
    if not resolved:
        raise RuntimeError("OMDB_API_KEY is not set.")
    return resolved
