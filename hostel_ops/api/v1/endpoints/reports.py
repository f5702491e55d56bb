from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from hostel_ops.deps import SessionDep
from hostel_ops.services import ReportService


router = APIRouter()


@router.get("/staff/{staff_id}")
async def staff_summary(
    staff_id: str,
    sess: SessionDep,
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
):
    """Sales, commission, advances and absences of one staff member"""
    summary = await ReportService(sess).staff_summary(staff_id, date_from, date_to)
    return {"data": summary}
