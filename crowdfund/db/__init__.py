"""Database — SQLAlchemy declarative base and column types shared by ORM models."""
