"""
Result types returned by the OMDb lookups.
"""

from omdb_lookup.models.omdb import OmdbRecord, OmdbResult, OmdbSearchResults

__all__ = [
    "OmdbRecord",
    "OmdbResult",
    "OmdbSearchResults",
]
