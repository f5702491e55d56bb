from typing import Optional

from sqlalchemy import func, select

from hostel_ops.core import ValidationError
from hostel_ops.models import Booking
from .collections import CollectionService

# Rows the database removes or unlinks together with a staff member
CASCADED_COLLECTIONS = ("absences", "salary-advances", "users")


class StaffService(CollectionService):
    """Staff members; sales keep their seller, HR rows go with them"""

    async def before_delete(self, record_id: str, *, actor_id: Optional[str] = None) -> None:
        staff = await self.repository.get(record_id)
        if staff is None:
            return

        sales = await self.session.scalar(
            select(func.count()).select_from(Booking).where(Booking.staff_id == record_id)
        ) or 0
        if sales:
            raise ValidationError(
                f'Staff member "{staff.name}" has {sales} booking(s) and cannot be deleted',
                field="bookings",
            )

    def after_delete(self, record_id: str) -> None:
        for name in CASCADED_COLLECTIONS:
            if name in self.state:
                self.state.collection(name).invalidate()
