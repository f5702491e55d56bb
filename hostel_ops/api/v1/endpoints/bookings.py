import csv
import io
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from hostel_ops.api.v1.schemas.booking_schemas import (
    ActivitySale, BookingReplace, ExtraSale, PrivateTourSale, SpeedBoatSale, TaxiBoatSale
)
from hostel_ops.deps import SessionDep, StateDep
from hostel_ops.roles import Role, View
from hostel_ops.security import role_required, view_required
from hostel_ops.services import BookingService, ReportService
from hostel_ops.services.report_service import EXPORT_COLUMNS


router = APIRouter()

sellers = [Depends(view_required(View.booking, View.activities))]


async def _sell(sess, state, item_type: str, payload) -> dict:
    service = BookingService(sess, state)
    record, summary = await service.sell(item_type, payload.model_dump())
    return {"data": record, "message": summary}


@router.post("/activity", status_code=status.HTTP_201_CREATED, dependencies=sellers)
async def sell_activity(payload: ActivitySale, sess: SessionDep, state: StateDep):
    """Record an activity sale; prices, costs and commission are computed here"""
    return await _sell(sess, state, "activity", payload)


@router.post("/speedboat", status_code=status.HTTP_201_CREATED, dependencies=sellers)
async def sell_speedboat(payload: SpeedBoatSale, sess: SessionDep, state: StateDep):
    return await _sell(sess, state, "speedboat", payload)


@router.post("/private-tour", status_code=status.HTTP_201_CREATED, dependencies=sellers)
async def sell_private_tour(payload: PrivateTourSale, sess: SessionDep, state: StateDep):
    return await _sell(sess, state, "private_tour", payload)


@router.post("/extra", status_code=status.HTTP_201_CREATED, dependencies=sellers)
async def sell_extra(payload: ExtraSale, sess: SessionDep, state: StateDep):
    return await _sell(sess, state, "extra", payload)


@router.post("/taxi-boat", status_code=status.HTTP_201_CREATED, dependencies=sellers)
async def sell_taxi_boat(payload: TaxiBoatSale, sess: SessionDep, state: StateDep):
    return await _sell(sess, state, "taxi_boat", payload)


@router.get("/export", dependencies=[Depends(role_required(Role.admin))])
async def export_bookings(
    sess: SessionDep,
    format: str = Query("json", pattern="^(json|csv)$"),
    staff_id: Optional[str] = Query(None, alias="staffId"),
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
):
    """Export bookings in JSON or CSV format."""
    bookings = await ReportService(sess).export_bookings(
        staff_id=staff_id, date_from=date_from, date_to=date_to
    )

    if format == "csv":
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=EXPORT_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        for booking in bookings:
            writer.writerow({k: "" if v is None else v for k, v in booking.items()})
        buf.seek(0)
        return StreamingResponse(
            io.BytesIO(buf.getvalue().encode()),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=bookings.csv"}
        )

    return {"data": bookings}


@router.put("/{booking_id}", dependencies=[Depends(role_required(Role.admin))])
async def replace_booking(booking_id: str, payload: BookingReplace, sess: SessionDep, state: StateDep):
    """Rerun the calculator over a full sale and replace the stored booking"""
    service = BookingService(sess, state)
    request = payload.root.model_dump()
    record, summary = await service.replace_booking(booking_id, request["item_type"], request)
    return {"data": record, "message": summary}


@router.delete("/{booking_id}", dependencies=[Depends(role_required(Role.admin))])
async def delete_booking(booking_id: str, sess: SessionDep, state: StateDep):
    service = BookingService(sess, state)
    await service.delete_booking(booking_id)
    return {"message": "Booking deleted successfully!"}
