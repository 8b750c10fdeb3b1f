"""Services Layer — CRUD orchestration and the identity flow.

Invariants:
    - Services never import FastAPI; the API layer maps their errors to HTTP
"""
