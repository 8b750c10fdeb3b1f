"""API Layer — FastAPI routes, dependencies, the access guard and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes decide HTTP status; services and repositories only raise
"""
