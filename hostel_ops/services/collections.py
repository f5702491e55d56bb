"""Uniform CRUD over every dashboard table.

Each table is described by a ``CollectionSpec``; ``CollectionService`` turns
the spec into create / read-all / replace / delete operations that translate
keys through the entity's ``FieldMap``, commit, and only then update the
in-memory mirror in ``AppState``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hostel_ops.casing import FieldMap
from hostel_ops.core import BaseRepository, BaseService, NotFoundError, PersistenceError
from hostel_ops.roles import View
from hostel_ops.state import AppState, Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionSpec:
    """Static description of one table as the dashboard sees it."""

    name: str                      # URL segment and state key, e.g. "speed-boat-trips"
    entity: str                    # "SpeedBoatTrip", used in not-found errors
    label: str                     # "speed boat trip", used in notices
    model: type
    fields: FieldMap
    order_by: Sequence[Any]
    sort_key: Callable[[Record], Any]
    view: View
    reverse: bool = False
    title_field: Optional[str] = None    # camelCase key shown in confirmations
    read_views: Sequence[View] = ()      # other views that may list this table
    admin_writes: bool = False
    generic_writes: bool = True          # False when a dedicated service writes
    repository: Optional[Callable[[AsyncSession], BaseRepository]] = None
    service: Optional[type] = None

    def make_repository(self, session: AsyncSession) -> BaseRepository:
        if self.repository is not None:
            return self.repository(session)
        return BaseRepository(self.model, session, order_by=self.order_by)

    def make_service(self, session: AsyncSession, state: AppState) -> "CollectionService":
        service_class = self.service or CollectionService
        return service_class(session, state, self)


class CollectionService(BaseService):
    """CRUD for one table, mirrored into the application state"""

    def __init__(self, session: AsyncSession, state: AppState, spec: CollectionSpec):
        super().__init__(session)
        self.spec = spec
        self.state = state
        self.repository = spec.make_repository(session)
        self.mirror = state.register(spec.name, sort_key=spec.sort_key, reverse=spec.reverse)

    # ------------------------------------------------------------------ reads

    async def list(self, *, refresh: bool = False) -> List[Record]:
        """All records in display order, served from the mirror once loaded"""
        if refresh or not self.mirror.loaded:
            try:
                rows = await self.repository.fetch_all()
            except SQLAlchemyError as exc:
                logger.exception("Error loading %s", self.spec.name)
                raise PersistenceError(f"load {self.spec.label} records") from exc
            self.mirror.load([self.to_record(row) for row in rows])
        return self.mirror.all()

    async def get(self, record_id: str) -> Record:
        db_obj = await self.repository.get(record_id)
        if db_obj is None:
            raise NotFoundError(self.spec.entity, record_id)
        return self.to_record(db_obj)

    # -------------------------------------------------------------- mutations

    async def create(self, record: Record) -> Record:
        """Persist a new record (camelCase, without id) and return it with its id"""
        record = await self.before_create(dict(record))
        return await self.insert_row(self.spec.fields.to_row(record), action=f"add {self.spec.label}")

    async def update(self, record_id: str, record: Record) -> Record:
        """Replace the whole record identified by *record_id*"""
        record = await self.before_update(record_id, dict(record))
        row = self.spec.fields.to_row(record)
        row.pop("id", None)
        return await self.replace_row(record_id, row, action=f"update {self.spec.label}")

    async def delete(self, record_id: str, *, actor_id: Optional[str] = None) -> None:
        await self.before_delete(record_id, actor_id=actor_id)
        action = f"delete {self.spec.label}"
        try:
            deleted = await self.repository.delete(id=record_id)
            if not deleted:
                raise NotFoundError(self.spec.entity, record_id)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self._fail(action, exc)
        self.mirror.apply_delete(record_id)
        self.after_delete(record_id)
        logger.info("Deleted %s %s", self.spec.label, record_id)

    async def insert_row(self, row: Dict[str, Any], *, action: str) -> Record:
        """Insert a snake_case row, commit, then mirror the stored record"""
        try:
            db_obj = await self.repository.insert(obj_in=row)
            saved = self.to_record(db_obj)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self._fail(action, exc)
        if self.mirror.loaded:
            self.mirror.apply_insert(saved)
        return saved

    async def replace_row(self, record_id: str, row: Dict[str, Any], *, action: str) -> Record:
        try:
            db_obj = await self.repository.replace(id=record_id, obj_in=row)
            if db_obj is None:
                raise NotFoundError(self.spec.entity, record_id)
            saved = self.to_record(db_obj)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self._fail(action, exc)
        if self.mirror.loaded:
            self.mirror.apply_replace(saved)
        return saved

    # ------------------------------------------------------------------ hooks

    async def before_create(self, record: Record) -> Record:
        return record

    async def before_update(self, record_id: str, record: Record) -> Record:
        return record

    async def before_delete(self, record_id: str, *, actor_id: Optional[str] = None) -> None:
        return None

    def after_delete(self, record_id: str) -> None:
        """Runs once the delete is committed; tables the database cascaded into go stale here"""
        return None

    # ---------------------------------------------------------------- helpers

    def to_record(self, db_obj: Any) -> Record:
        return self.spec.fields.to_record(self.repository.to_row(db_obj))

    def confirmation(self, verb: str, record: Optional[Record] = None) -> str:
        """Notice shown after a successful mutation, e.g. 'User "ann" created successfully!'"""
        label = self.spec.label[:1].upper() + self.spec.label[1:]
        title = record.get(self.spec.title_field) if record and self.spec.title_field else None
        if title:
            return f'{label} "{title}" {verb} successfully!'
        return f"{label} {verb} successfully!"

    async def _fail(self, action: str, exc: Exception) -> None:
        await self.session.rollback()
        logger.exception("Error trying to %s", action)
        raise PersistenceError(action) from exc
