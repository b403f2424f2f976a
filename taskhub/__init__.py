"""
TaskHub Backend — Application Package Initializer
===================================================

What: Marks the `taskhub` directory as a Python package.
Who:  Imported by uvicorn (`taskhub.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is layered; every request passes down through each layer:

    ┌─────────────────────────────────────┐
    │     Routes (Resource Handlers)      │  ← HTTP concerns, status codes
    ├─────────────────────────────────────┤
    │   Dependencies (Auth Guard, DI)     │  ← session lookup, db session
    ├─────────────────────────────────────┤
    │   Services (Persistence Gateway)    │  ← ownership-scoped CRUD
    ├─────────────────────────────────────┤
    │    Models & Schemas (Data)          │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │    Database / Session Store         │  ← built by create_app()
    └─────────────────────────────────────┘

    The database handle and the session store are constructed by the
    application factory and reach handlers through FastAPI dependencies,
    so each test can build an isolated application.
"""

__version__ = "1.0.0"
