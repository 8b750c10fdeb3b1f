"""Foo Schemas — JSON bodies accepted and returned by /foos."""

from pydantic import BaseModel

from foopoc.core.domain_types import Foo


class FooIn(BaseModel):
    """Body of POST /foos and PUT /foos/{id}."""
    name: str


class FooOut(BaseModel):
    id: int
    name: str

    @classmethod
    def from_record(cls, foo: Foo) -> "FooOut":
        return cls(id=foo.id, name=foo.name)


class MessageOut(BaseModel):
    message: str
