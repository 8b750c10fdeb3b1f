"""Domain Types — Foo records and display claims.

Tests:
    - Foo is frozen and serializes to {id, name}
    - Claims.from_payload tolerates absent claims but rejects non-string ones
"""

from dataclasses import FrozenInstanceError

import pytest

from foopoc.core.domain_types import Claims, Foo, FooId
from foopoc.core.errors import ClaimsError


def test_foo_is_frozen():
    foo = Foo(id=FooId(1), name="a")
    with pytest.raises(FrozenInstanceError):
        foo.name = "b"


def test_foo_to_dict():
    assert Foo(id=FooId(3), name="x").to_dict() == {"id": 3, "name": "x"}


def test_claims_from_full_payload():
    claims = Claims.from_payload({
        "name": "Ada", "email": "ada@example.com", "sub": "1", "aud": "c",
    })
    assert claims == Claims(name="Ada", email="ada@example.com")


def test_claims_absent_values_are_empty():
    assert Claims.from_payload({"sub": "1"}) == Claims(name="", email="")
    assert Claims.from_payload({"name": None}) == Claims(name="", email="")


@pytest.mark.parametrize("payload", [
    {"name": 42},
    {"email": ["a@b"]},
    {"name": "ok", "email": {"primary": "a@b"}},
])
def test_claims_reject_non_string(payload):
    with pytest.raises(ClaimsError) as exc_info:
        Claims.from_payload(payload)
    assert exc_info.value.code == "C4LM5X"


def test_claims_reject_non_object_payload():
    with pytest.raises(ClaimsError):
        Claims.from_payload(["name", "email"])
