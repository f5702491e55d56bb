from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError

from hostel_ops.casing import BOOKING_FIELDS
from hostel_ops.core import BaseService, NotFoundError, PersistenceError, ValidationError
from hostel_ops.infrastructure.repositories import (
    AbsenceRepository,
    BookingRepository,
    SalaryAdvanceRepository,
)
from hostel_ops.models import Staff

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Flat column order for CSV exports; extras are summarised by extrasTotal
EXPORT_COLUMNS = [
    BOOKING_FIELDS.snake_to_camel[name]
    for name in BOOKING_FIELDS.fields
    if name != "extras"
]


class ReportService(BaseService):
    """Read-only aggregates over sales and HR records"""

    def __init__(self, session):
        super().__init__(session)
        self.booking_repo = BookingRepository(session)
        self.absence_repo = AbsenceRepository(session)
        self.advance_repo = SalaryAdvanceRepository(session)

    async def staff_summary(
        self,
        staff_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Dict[str, Any]:
        """Sales, commission, salary advances and absences of one staff member"""
        _check_range(date_from, date_to)
        staff = await self.session.get(Staff, staff_id)
        if staff is None:
            raise NotFoundError("Staff", staff_id)

        try:
            bookings = await self.booking_repo.get_between(
                staff_id=staff_id, from_date=date_from, to_date=date_to
            )
            advances = await self.advance_repo.get_for_staff(
                staff_id, from_date=date_from, to_date=date_to
            )
            absences = await self.absence_repo.get_for_staff(
                staff_id, from_date=date_from, to_date=date_to
            )
        except SQLAlchemyError as exc:
            logger.exception("Error building summary for staff %s", staff_id)
            raise PersistenceError("load staff summary") from exc

        commission_total = sum((b.employee_commission or ZERO for b in bookings), ZERO)
        advances_total = sum((a.amount or ZERO for a in advances), ZERO)
        return {
            "staffId": staff.id,
            "staffName": staff.name,
            "dateFrom": date_from,
            "dateTo": date_to,
            "salary": staff.salary,
            "salesCount": len(bookings),
            "salesTotal": sum((b.customer_price or ZERO for b in bookings), ZERO),
            "commissionTotal": commission_total,
            "salaryAdvancesTotal": advances_total,
            "absenceCount": len(absences),
            "netPayable": (staff.salary or ZERO) + commission_total - advances_total,
        }

    async def export_bookings(
        self,
        *,
        staff_id: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """Booking records (camelCase) in display order for download"""
        _check_range(date_from, date_to)
        try:
            bookings = await self.booking_repo.get_between(
                staff_id=staff_id, from_date=date_from, to_date=date_to
            )
        except SQLAlchemyError as exc:
            logger.exception("Error exporting bookings")
            raise PersistenceError("export bookings") from exc
        return [BOOKING_FIELDS.to_record(self.booking_repo.to_row(b)) for b in bookings]


def _check_range(date_from: Optional[date], date_to: Optional[date]) -> None:
    if date_from and date_to and date_from > date_to:
        raise ValidationError("dateFrom must not be after dateTo", field="dateFrom")
