from .base import CamelModel, MessageOut
from .auth_schemas import (
    LoginRequest, LoginResponse, RefreshTokenRequest, RefreshTokenResponse, SessionOut
)
from .booking_schemas import (
    ExtraLineIn, SaleBase, ActivitySale, SpeedBoatSale, PrivateTourSale, ExtraSale,
    TaxiBoatSale, BookingReplace
)
from .collection_schemas import COLLECTION_SCHEMAS, UserCreate, UserUpdate

__all__ = [
    # Common
    "CamelModel",
    "MessageOut",

    # Auth schemas
    "LoginRequest",
    "LoginResponse",
    "RefreshTokenRequest",
    "RefreshTokenResponse",
    "SessionOut",

    # Booking schemas
    "ExtraLineIn",
    "SaleBase",
    "ActivitySale",
    "SpeedBoatSale",
    "PrivateTourSale",
    "ExtraSale",
    "TaxiBoatSale",
    "BookingReplace",

    # Collection schemas
    "COLLECTION_SCHEMAS",
    "UserCreate",
    "UserUpdate",
]
