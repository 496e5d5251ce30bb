"""
Library System API Package.

A REST service for running a small library: books and their authors,
members and membership plans, courses, loans, fines and staff users.

Key Components:
- models: Pydantic models for request bodies and responses
- validation: Input rules checked before any write
- database: SQLAlchemy schema, sessions and per-entity repositories
- api: FastAPI routers, one per resource
- config: Configuration management with Pydantic v2
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
