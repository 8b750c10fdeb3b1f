"""In-Memory Foo Repository — dict-backed FooRepository for tests and local runs.

Invariants:
    - Same contract as SqlFooRepository: ids start at 1, increase, never reused
    - list_foos returns records ordered by id
"""

from foopoc.core.domain_types import Foo, FooId
from foopoc.core.errors import NotFoundError


class InMemoryFooRepository:

    def __init__(self):
        self._rows: dict[int, str] = {}
        self._next_id = 1

    async def list_foos(self) -> list[Foo]:
        return [
            Foo(id=FooId(foo_id), name=name)
            for foo_id, name in sorted(self._rows.items())
        ]

    async def create_foo(self, name: str) -> Foo:
        foo_id = self._next_id
        self._next_id += 1
        self._rows[foo_id] = name
        return Foo(id=FooId(foo_id), name=name)

    async def delete_foos(self) -> int:
        deleted = len(self._rows)
        self._rows.clear()
        return deleted

    async def update_foo(self, foo_id: FooId, name: str) -> Foo:
        if foo_id not in self._rows:
            raise NotFoundError("foo", foo_id, "M5NF0E")
        self._rows[foo_id] = name
        return Foo(id=foo_id, name=name)
