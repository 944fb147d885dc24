r"""
Centralized access to the database models.

Importing this package registers every model on `Base.metadata`, which the
alembic environment and the test fixtures rely on.
"""

from .user import User

__all__ = [
    "User",
]
