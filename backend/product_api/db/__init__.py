"""Database package: declarative base shared by all ORM models."""
