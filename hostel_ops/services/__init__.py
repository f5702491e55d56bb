from .collections import CollectionService, CollectionSpec
from .registry import COLLECTIONS, get_collection
from .user_service import UserService
from .staff_service import StaffService
from .room_service import RoomService
from .utility_service import UtilityCategoryService
from .booking_service import BookingService
from .auth_service import AuthService
from .report_service import ReportService

__all__ = [
    "CollectionService",
    "CollectionSpec",
    "COLLECTIONS",
    "get_collection",
    "UserService",
    "StaffService",
    "RoomService",
    "UtilityCategoryService",
    "BookingService",
    "AuthService",
    "ReportService",
]
