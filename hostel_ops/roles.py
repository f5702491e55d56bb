from enum import Enum
from typing import Dict, FrozenSet


class Role(str, Enum):
    """Enumerates every role recognised by the dashboard.

    Inherits from *str* so values serialise straight into JSON and JWT claims.
    """

    admin = "Admin"
    staff = "Staff"


class View(str, Enum):
    """Top-level dashboard sections a role may open."""

    rooms = "rooms"
    booking = "booking"
    staff = "staff"
    users = "users"
    utilities = "utilities"
    activities = "activities"


ROLE_VIEWS: Dict[Role, FrozenSet[View]] = {
    Role.admin: frozenset(View),
    Role.staff: frozenset({View.rooms, View.booking, View.activities, View.utilities}),
}


def allowed_views(role: "Role | str") -> FrozenSet[View]:
    """Views visible to *role*; unknown roles see nothing."""
    try:
        return ROLE_VIEWS[Role(role)]
    except ValueError:
        return frozenset()


def can_view(role: "Role | str", view: View) -> bool:
    return view in allowed_views(role)
