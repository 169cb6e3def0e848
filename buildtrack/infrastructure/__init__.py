"""
Infrastructure layer for the construction task tracker.

This layer contains the implementation details behind the domain ports:
- Database (SQLAlchemy, Alembic migrations)
- Authentication (JWT bearer tokens)
- Domain event handlers
- HTTP routers and error handling (FastAPI)
"""
