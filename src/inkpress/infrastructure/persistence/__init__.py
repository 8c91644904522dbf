"""Persistence layer: database engine, ORM models and repositories."""
