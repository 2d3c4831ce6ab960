"""Declarative base shared by the record store tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Every ORM model registers on this metadata; ``create_all`` builds them at startup."""
