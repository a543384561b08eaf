"""Database primitives - declarative base shared by all ORM models."""
