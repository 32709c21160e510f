"""ORM CRUD demo.

Connects to a relational database through SQLModel, recreates a single
``Users`` table and walks through create, read, update and delete.
"""

__version__ = "0.1.0"
