from fastapi import APIRouter, Depends

from hostel_ops.api.v1.endpoints import auth, bookings, reports, uploads
from hostel_ops.api.v1.endpoints.collections import build_collection_router
from hostel_ops.api.v1.schemas import COLLECTION_SCHEMAS, UserCreate, UserUpdate
from hostel_ops.roles import Role, View
from hostel_ops.security import role_required, view_required
from hostel_ops.services import COLLECTIONS


# Create main API router
api_v1_router = APIRouter()

# Include auth endpoints (public access)
api_v1_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["auth"]
)

# Sale endpoints go first so /bookings/export is not taken for a booking id
api_v1_router.include_router(
    bookings.router,
    prefix="/bookings",
    tags=["bookings"]
)

# One CRUD router per collection, access declared on the collection
for name, spec in COLLECTIONS.items():
    if name == "users":
        create_schema, update_schema = UserCreate, UserUpdate
    elif name == "bookings":
        create_schema = update_schema = None
    else:
        create_schema = update_schema = COLLECTION_SCHEMAS[name]
    api_v1_router.include_router(
        build_collection_router(spec, create_schema, update_schema),
        prefix=f"/{name}",
        tags=[name]
    )

# Include report endpoints (admin access)
api_v1_router.include_router(
    reports.router,
    prefix="/reports",
    tags=["reports"],
    dependencies=[Depends(role_required(Role.admin))]
)

# Include upload endpoints (any signed-in dashboard user)
api_v1_router.include_router(
    uploads.router,
    prefix="/uploads",
    tags=["uploads"],
    dependencies=[Depends(view_required(*View))]
)
