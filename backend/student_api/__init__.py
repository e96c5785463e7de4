"""
Student Records API - Application Package
===========================================

What: REST API for registering, authenticating, reading, updating and
      deleting student records kept in a managed PostgreSQL table.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     StudentService (rules)          │  ← required fields, credential checks
    ├─────────────────────────────────────┤
    │     StudentStore (table access)     │  ← select/insert/update/delete by equality
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
