"""Pydantic Schemas — request/response contracts for the JSON API.

Invariants:
    - Schemas validate at the HTTP boundary; services receive plain values
"""
