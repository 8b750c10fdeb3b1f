"""Boundary Protocols — contract between the orchestration layer and the store.

Invariants:
    - Services depend on FooRepository, never on a concrete adapter
    - Every method is a single store round trip

Design Decisions:
    - Protocol over ABC: SqlFooRepository and InMemoryFooRepository share no base class
"""

from typing import Protocol

from foopoc.core.domain_types import Foo, FooId


class FooRepository(Protocol):
    """Contract for Foo persistence — implemented by repositories/."""

    async def list_foos(self) -> list[Foo]:
        """All records ordered by id ascending. Raises StoreError."""
        ...

    async def create_foo(self, name: str) -> Foo:
        """Insert and return the record with its store-assigned id. Raises StoreError."""
        ...

    async def delete_foos(self) -> int:
        """Delete EVERY record (unscoped) and return the count. Raises StoreError."""
        ...

    async def update_foo(self, foo_id: FooId, name: str) -> Foo:
        """Rename a record. Raises NotFoundError for an unknown id, StoreError otherwise."""
        ...
