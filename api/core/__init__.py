"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks both stores use (DB pool wiring,
settings, logging, identifier parsing, the error taxonomy). Keep
entity-specific SQL in the corresponding feature package (e.g. `answers/`).
"""
