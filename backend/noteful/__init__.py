"""
Noteful Backend — Application Package
=======================================

Notes, folders and tags over a REST API.

Architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Validation  │  Services            │  ← references, required fields,
    │              │  Integrity cascades  │    queries, delete cascades
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

Services are built per request around the request's session (see
dependencies.py), so each layer can be tested with a substitute store.
"""

__version__ = "1.0.0"
