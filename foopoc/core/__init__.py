"""Core Layer — domain types, error hierarchy and repository contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - No IO, no async
"""
