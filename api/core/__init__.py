"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every resource uses (DB pool,
settings, logging, errors, the list filter and query builder). Keep
resource-specific SQL and row mapping in the resource package
(e.g. `incantesimi/`).
"""
