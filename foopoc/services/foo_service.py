"""Foo Service — forwards CRUD calls to a FooRepository.

Invariants:
    - No validation or business rules beyond what the store enforces
    - Errors keep their type; each call site only adds its diagnostic tag
"""

from foopoc.core.domain_types import Foo, FooId
from foopoc.core.errors import FooPocError
from foopoc.core.repository_protocols import FooRepository


class FooService:

    def __init__(self, repo: FooRepository):
        self._repo = repo

    async def list_foos(self) -> list[Foo]:
        try:
            return await self._repo.list_foos()
        except FooPocError as exc:
            raise exc.annotate("S1LS4F", "Getting foos.")

    async def create_foo(self, name: str) -> Foo:
        try:
            return await self._repo.create_foo(name)
        except FooPocError as exc:
            raise exc.annotate("S2CR8F", "Creating foo.")

    async def delete_foos(self) -> int:
        """Delete every foo. Unscoped: there is no filter."""
        try:
            return await self._repo.delete_foos()
        except FooPocError as exc:
            raise exc.annotate("S3DL1F", "Deleting foos.")

    async def update_foo(self, foo_id: FooId, name: str) -> Foo:
        try:
            return await self._repo.update_foo(foo_id, name)
        except FooPocError as exc:
            raise exc.annotate("S4UP5F", "Updating foo.")
