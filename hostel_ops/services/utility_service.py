from typing import Optional

from sqlalchemy import func, select

from hostel_ops.core import ValidationError
from hostel_ops.models import UtilityCategory
from hostel_ops.state import Record
from .collections import CollectionService


class UtilityCategoryService(CollectionService):
    """Utility categories; names are unique regardless of case"""

    async def before_create(self, record: Record) -> Record:
        record["name"] = await self._check_name(record.get("name"))
        return record

    async def before_update(self, record_id: str, record: Record) -> Record:
        record["name"] = await self._check_name(record.get("name"), exclude_id=record_id)
        return record

    async def _check_name(self, name: Optional[str], *, exclude_id: Optional[str] = None) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required", field="name")

        query = select(UtilityCategory.id).where(func.lower(UtilityCategory.name) == name.lower())
        if exclude_id:
            query = query.where(UtilityCategory.id != exclude_id)
        result = await self.session.execute(query)
        if result.scalar() is not None:
            raise ValidationError(f'Category "{name}" already exists', field="name")
        return name
