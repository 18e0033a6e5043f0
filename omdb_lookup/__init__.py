"""
Client library for the OMDb movie-metadata API.

Lookup entrypoints live in `omdb_lookup.integrations.omdb`; result types in
`omdb_lookup.models`; terminal rendering of single records in `omdb_lookup.formatting`.
"""
