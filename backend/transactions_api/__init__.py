"""Transactions API package - records and lists money transfers between accounts.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
