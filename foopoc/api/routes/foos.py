"""Foo Routes — guarded JSON CRUD over the foos table.

Invariants:
    - Every route requires a verified bearer assertion (router-level guard)
    - Errors leave here annotated with a handler tag; error_handlers renders them
    - DELETE /foos removes EVERY foo: there is no scoped delete
"""

import logging
import re

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from foopoc.api.dependencies import get_foo_service, require_claims
from foopoc.core.domain_types import FooId
from foopoc.core.errors import BadRequestError, FooPocError
from foopoc.schemas.foo import FooIn, FooOut, MessageOut
from foopoc.services.foo_service import FooService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/foos", tags=["foos"], dependencies=[Depends(require_claims)],
)


async def _parse_body(request: Request, code: str) -> FooIn:
    raw = await request.body()
    try:
        return FooIn.model_validate_json(raw)
    except ValidationError as e:
        raise BadRequestError("Parsing request body.", code) from e


_FOO_ID = re.compile(r"-?[0-9]+")


def _parse_foo_id(value: str) -> FooId:
    # ASCII digits only: int() would also take "1_0", " 1" and non-ASCII digits.
    if not _FOO_ID.fullmatch(value):
        raise BadRequestError("Parsing foo id from path.", "H5ID7P")
    return FooId(int(value))


@router.get("", response_model=list[FooOut])
async def list_foos(service: FooService = Depends(get_foo_service)):
    try:
        foos = await service.list_foos()
    except FooPocError as exc:
        raise exc.annotate("H1LS2G", "Getting foos in handler.")
    return [FooOut.from_record(f) for f in foos]


@router.post("", response_model=FooOut)
async def create_foo(
    request: Request, service: FooService = Depends(get_foo_service),
):
    body = await _parse_body(request, "H2BD6C")
    try:
        foo = await service.create_foo(body.name)
    except FooPocError as exc:
        raise exc.annotate("H2CR9C", "Creating foo in handler.")
    return FooOut.from_record(foo)


@router.delete("", response_model=MessageOut)
async def delete_foos(service: FooService = Depends(get_foo_service)):
    try:
        deleted = await service.delete_foos()
    except FooPocError as exc:
        raise exc.annotate("H3DL4D", "Deleting foos in handler.")
    return MessageOut(message=f"{deleted} foos deleted.")


@router.put("/{foo_id}", response_model=FooOut)
async def update_foo(
    foo_id: str,
    request: Request,
    service: FooService = Depends(get_foo_service),
):
    parsed_id = _parse_foo_id(foo_id)
    body = await _parse_body(request, "H4BD1U")
    try:
        foo = await service.update_foo(parsed_id, body.name)
    except FooPocError as exc:
        raise exc.annotate("H4UP3U", "Updating foo in handler.")
    return FooOut.from_record(foo)
