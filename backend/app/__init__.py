"""
CustomerBook Backend — Application Package
============================================

Layers:

    ┌─────────────────────────────────────┐
    │  Pages (HTML) → Views → API Client  │  ← browser UI, talks HTTP to the API
    ├─────────────────────────────────────┤
    │           Routes (JSON API)         │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (CustomerService/Store)  │  ← status mapping, validation, SQL
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
