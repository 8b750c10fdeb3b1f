"""Infrastructure Layer — database engine, identity provider client, logging.

Invariants:
    - Infrastructure maps library exceptions to core/errors.py at the call site
"""
