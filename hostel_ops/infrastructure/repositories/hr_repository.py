from typing import Optional, List
from datetime import date
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hostel_ops.core import BaseRepository
from hostel_ops.models import Absence, SalaryAdvance


class AbsenceRepository(BaseRepository[Absence]):
    def __init__(self, session: AsyncSession):
        super().__init__(Absence, session, order_by=(Absence.date.desc(),))

    async def get_for_staff(
        self,
        staff_id: str,
        *,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[Absence]:
        query = select(Absence).where(Absence.staff_id == staff_id)
        if from_date:
            query = query.where(Absence.date >= from_date)
        if to_date:
            query = query.where(Absence.date <= to_date)
        result = await self.session.execute(query.order_by(*self.order_by))
        return list(result.scalars().all())


class SalaryAdvanceRepository(BaseRepository[SalaryAdvance]):
    def __init__(self, session: AsyncSession):
        super().__init__(SalaryAdvance, session, order_by=(SalaryAdvance.date.desc(),))

    async def get_for_staff(
        self,
        staff_id: str,
        *,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[SalaryAdvance]:
        query = select(SalaryAdvance).where(SalaryAdvance.staff_id == staff_id)
        if from_date:
            query = query.where(SalaryAdvance.date >= from_date)
        if to_date:
            query = query.where(SalaryAdvance.date <= to_date)
        result = await self.session.execute(query.order_by(*self.order_by))
        return list(result.scalars().all())
