from typing import Optional, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession

from hostel_ops.core import BaseRepository
from hostel_ops.models import Room, Bed


class RoomRepository(BaseRepository[Room]):
    """Room repository; beds are persisted together with their room"""

    def __init__(self, session: AsyncSession):
        super().__init__(Room, session, order_by=(Room.name,))

    async def insert(self, *, obj_in: Dict[str, Any]) -> Room:
        """Create a room and its beds in one flush"""
        data = dict(obj_in)
        beds = data.pop("beds", None) or []
        data.pop("id", None)
        room = Room(
            **data,
            beds=[Bed(number=b["number"], status=b.get("status") or "Ready") for b in beds],
        )
        self.session.add(room)
        await self.session.flush()
        return room

    async def replace(self, *, id: Any, obj_in: Dict[str, Any]) -> Optional[Room]:
        """Replace room fields; beds are updated by id and new beds appended"""
        room = await self.get(id)
        if not room:
            return None

        for column in self.writable_columns():
            setattr(room, column, obj_in.get(column))

        existing = {bed.id: bed for bed in room.beds}
        for bed_in in obj_in.get("beds") or []:
            bed = existing.get(bed_in.get("id"))
            if bed is None:
                room.beds.append(Bed(number=bed_in["number"], status=bed_in.get("status") or "Ready"))
            else:
                bed.number = bed_in["number"]
                bed.status = bed_in.get("status") or bed.status

        await self.session.flush()
        return room

    def to_row(self, db_obj: Room) -> Dict[str, Any]:
        row = super().to_row(db_obj)
        row["beds"] = [self._bed_row(bed) for bed in sorted(db_obj.beds, key=lambda b: b.number)]
        return row

    @staticmethod
    def _bed_row(bed: Bed) -> Dict[str, Any]:
        return {"id": bed.id, "number": bed.number, "status": bed.status}
