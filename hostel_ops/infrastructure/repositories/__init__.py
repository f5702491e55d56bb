from .room_repository import RoomRepository
from .user_repository import UserRepository
from .booking_repository import BookingRepository
from .hr_repository import AbsenceRepository, SalaryAdvanceRepository

__all__ = [
    "RoomRepository",
    "UserRepository",
    "BookingRepository",
    "AbsenceRepository",
    "SalaryAdvanceRepository",
]
