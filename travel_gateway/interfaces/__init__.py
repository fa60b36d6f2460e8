"""
Data Stores Package

- user_store: Registered users for /api/auth
"""

from .user_store import User, UserExistsError, UserStore

__all__ = [
    "User",
    "UserExistsError",
    "UserStore"
]
