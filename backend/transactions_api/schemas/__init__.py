"""Schemas - pydantic models at the boundary between handlers and the store."""
