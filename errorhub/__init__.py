"""
ErrorHub: centralized error handling for server applications.

Application package root. Hexagonal architecture (ports & adapters):
an error code plus run-time context is resolved against a declarative
catalog, formatted, and dispatched to pluggable handlers.

Layers:
    - domain: Catalog, resolution, formatting, dispatch, simulation. No IO.
    - application: Administrative use cases and DTOs.
    - infrastructure: Handlers and adapters (log, DB, email, Slack, YAML).
    - interfaces: FastAPI routers, Pydantic schemas, composition root.
    - shared: Cross-cutting concerns (error mapping, middleware, logging).
"""

__version__ = "0.1.0"
