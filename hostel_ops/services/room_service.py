from typing import Optional

from sqlalchemy import func, select

from hostel_ops.core import ValidationError
from hostel_ops.models import AccommodationBooking, WalkInGuest
from .collections import CollectionService


class RoomService(CollectionService):
    """Rooms; a room with guests on record cannot be removed"""

    async def before_delete(self, record_id: str, *, actor_id: Optional[str] = None) -> None:
        room = await self.repository.get(record_id)
        if room is None:
            return

        dependents = []
        for model, label in ((WalkInGuest, "walk-in guest(s)"), (AccommodationBooking, "accommodation booking(s)")):
            count = await self.session.scalar(
                select(func.count()).select_from(model).where(model.room_id == record_id)
            ) or 0
            if count:
                dependents.append(f"{count} {label}")

        if dependents:
            raise ValidationError(
                f'Room "{room.name}" has {" and ".join(dependents)} and cannot be deleted',
                field="roomId",
            )
