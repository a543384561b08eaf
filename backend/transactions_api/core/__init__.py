"""Core - pure domain logic with no IO.

Invariants:
    - Modules here never import from infrastructure, api or models
    - Every function is deterministic for a given input (trace numbers excepted)
"""
