"""
OMDb integration client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from omdb_lookup.integrations.omdb.client import (
        OMDB_MEDIA_TYPES,
        OmdbClientError,
        OmdbQueryError,
        find_by_id,
        find_by_title,
        search_by_title,
    )

__all__ = [
    "OMDB_MEDIA_TYPES",
    "OmdbClientError",
    "OmdbQueryError",
    "find_by_id",
    "find_by_title",
    "search_by_title",
]


def __getattr__(name: str):
    if name in __all__:
        from omdb_lookup.integrations.omdb import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
