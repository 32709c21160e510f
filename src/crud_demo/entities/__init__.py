"""Entities organised by business concept.

Each entity package holds its domain model (entity.py), its persistence
model (table.py) and its data access layer (repository.py).
"""

from .core.user import User, UserRepository, UserTable

__all__ = ["User", "UserTable", "UserRepository"]
