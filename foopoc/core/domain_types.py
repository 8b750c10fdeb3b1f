"""Domain Types — records and claims passed between layers.

Invariants:
    - Foo and Claims are frozen: layers above the store never mutate a record
    - Claims only exist for the duration of one request/response cycle
"""

from dataclasses import dataclass
from typing import Any, NewType

from foopoc.core.errors import ClaimsError


FooId = NewType("FooId", int)


@dataclass(frozen=True)
class Foo:
    """A single row of the foos table."""
    id: FooId
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Claims:
    """Display claims taken from a verified identity assertion."""
    name: str
    email: str

    @classmethod
    def from_payload(cls, payload: Any) -> "Claims":
        """Decode name/email from a verified JWT payload.

        Absent claims decode to empty strings; present claims must be strings.
        """
        if not isinstance(payload, dict):
            raise ClaimsError("Assertion payload is not a JSON object")
        values = {}
        for key in ("name", "email"):
            value = payload.get(key)
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise ClaimsError(f"Claim '{key}' is not a string")
            values[key] = value
        return cls(**values)
