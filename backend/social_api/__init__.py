"""
Social API: Application Package Initializer
===========================================

What:  HTTP API in front of the `posts` table: list, get, create, edit,
       soft-delete, restore, like and dislike.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← query params, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← statements, visibility rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← one async session per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
