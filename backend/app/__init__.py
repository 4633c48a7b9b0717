"""
Elite Logistic Backend — Application Package Initializer
=========================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows the same layered split on a much smaller surface:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       ShipmentStore (Persistence)   │  ← Validation, CRUD, sessions
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    The store is constructed once and handed to the app at startup
    (see create_app in main.py); routes never reach for a global connection.
"""

__version__ = "1.0.0"
