"""foopoc — Foo CRUD API with OpenID Connect login.

Invariants:
    - Package root has no import side-effects; it only carries the version
"""

__version__ = "0.1.0"
