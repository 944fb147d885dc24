"""
Repository layer.

Usage:
    from userapi.repositories import UserRepository
"""

from .base_repository import BaseRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
]
