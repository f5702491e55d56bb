"""Routers for the plain CRUD collections, one per ``CollectionSpec``."""

from typing import Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from hostel_ops.deps import SessionDep, StateDep
from hostel_ops.roles import Role
from hostel_ops.security import CurrentUser, role_required, view_required
from hostel_ops.services import CollectionSpec


def build_collection_router(
    spec: CollectionSpec,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
) -> APIRouter:
    """List / get for readers of the collection's views; create / replace /
    delete for writers (Admin only on administrator-owned tables)."""
    router = APIRouter()
    read = [Depends(view_required(spec.view, *spec.read_views))]
    if spec.admin_writes:
        write = [Depends(role_required(Role.admin))]
    else:
        write = [Depends(view_required(spec.view))]

    @router.get("", dependencies=read)
    async def list_records(sess: SessionDep, state: StateDep, refresh: bool = False):
        """All records in display order; ``refresh=true`` reloads from the database"""
        service = spec.make_service(sess, state)
        return {"data": await service.list(refresh=refresh)}

    @router.get("/{record_id}", dependencies=read)
    async def get_record(record_id: str, sess: SessionDep, state: StateDep):
        service = spec.make_service(sess, state)
        return {"data": await service.get(record_id)}

    if not spec.generic_writes:
        return router

    @router.post("", status_code=status.HTTP_201_CREATED, dependencies=write)
    async def create_record(payload: create_schema, sess: SessionDep, state: StateDep):
        service = spec.make_service(sess, state)
        record = await service.create(payload.model_dump(by_alias=True))
        return {"data": record, "message": service.confirmation("created", record)}

    @router.put("/{record_id}", dependencies=write)
    async def replace_record(record_id: str, payload: update_schema, sess: SessionDep, state: StateDep):
        service = spec.make_service(sess, state)
        record = await service.update(record_id, payload.model_dump(by_alias=True))
        return {"data": record, "message": service.confirmation("updated", record)}

    @router.delete("/{record_id}", dependencies=write)
    async def delete_record(record_id: str, sess: SessionDep, state: StateDep, user: CurrentUser):
        service = spec.make_service(sess, state)
        await service.delete(record_id, actor_id=user.get("sub"))
        return {"message": service.confirmation("deleted")}

    return router
