"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from relay.api import app

    uvicorn relay.api:app --reload
"""

from relay.api.app import app, create_app

__all__ = ["app", "create_app"]
