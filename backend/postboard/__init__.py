"""
Postboard Backend — Application Package Initializer
====================================================

What: Marks the `postboard` directory as a Python package.
Who:  Imported by uvicorn, Alembic, and pytest.

Architecture Note:
    The backend is a layered CRUD API over users, posts, tags and profiles:

    ┌─────────────────────────────────────┐
    │   Middleware (access log, CORS)     │  ← wraps every request
    ├─────────────────────────────────────┤
    │   Routes + request pipeline         │  ← auth gate, envelope, resolvers
    ├─────────────────────────────────────┤
    │   Services (Users, Posts)           │  ← pagination, error reclassification
    ├─────────────────────────────────────┤
    │   Gateway (async SQLAlchemy)        │  ← typed CRUD, typed errors
    └─────────────────────────────────────┘

    Errors from any layer are turned into HTTP responses in exactly one
    place: `postboard.error_handlers`.
"""

__version__ = "1.0.0"
