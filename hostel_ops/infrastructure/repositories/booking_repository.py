from typing import Optional, List
from datetime import date
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hostel_ops.core import BaseRepository
from hostel_ops.models import Booking


class BookingRepository(BaseRepository[Booking]):
    """Booking (sale) repository implementation"""

    def __init__(self, session: AsyncSession):
        super().__init__(Booking, session, order_by=(Booking.booking_date.desc(), Booking.created_at.desc()))

    async def get_between(
        self,
        *,
        staff_id: Optional[str] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[Booking]:
        """Bookings in an inclusive date range, optionally for one seller"""
        query = select(Booking)

        if staff_id:
            query = query.where(Booking.staff_id == staff_id)
        if from_date:
            query = query.where(Booking.booking_date >= from_date)
        if to_date:
            query = query.where(Booking.booking_date <= to_date)

        query = query.order_by(*self.order_by)
        result = await self.session.execute(query)
        return list(result.scalars().all())
