"""API Layer - FastAPI routes, dependencies, envelopes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is a {"status": ...} JSON envelope
"""
