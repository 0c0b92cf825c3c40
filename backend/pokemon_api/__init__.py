"""
Pokemon API — Application Package
===================================

CRUD service for Pokemon records with auto-generated API documentation.

Layers:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Resource Handlers)    │  ← Presence checks, result mapping
    ├─────────────────────────────────────┤
    │     Stores (Query Executors)        │  ← One statement per call
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
