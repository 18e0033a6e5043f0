"""
External service integrations.

The OMDb client lives under `omdb_lookup.integrations.omdb`; entrypoints (`scripts/`)
import from here rather than the other way around.
"""
