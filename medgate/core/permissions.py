"""Static permission data: roles, the permission matrix, route tiers and menus.

Everything here is built once at import time, validated, and then shared by
reference. Nothing in this module changes after import.
"""
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple, Sequence, Tuple

from medgate.core.errors import PermissionConfigError


class Role(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


class Category(str, Enum):
    USERS = "users"
    PATIENTS = "patients"
    RECORDS = "records"
    TRANSFERS = "transfers"


class Action(str, Enum):
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RECEIVE = "receive"
    COMPLETE = "complete"


class RouteTier(str, Enum):
    PUBLIC = "public"
    ADMIN_ONLY = "admin_only"
    SHARED = "shared"


class RouteDecision(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


PermissionMatrix = Mapping[Category, Mapping[Action, Tuple[Role, ...]]]


def build_permission_matrix(raw: Mapping) -> PermissionMatrix:
    """Validate a nested {category: {action: [roles]}} literal and freeze it."""
    matrix = {}
    for category_key, actions in raw.items():
        try:
            category = Category(category_key)
        except ValueError:
            raise PermissionConfigError(f"Unknown permission category: {category_key!r}")

        cells = {}
        for action_key, roles in actions.items():
            try:
                action = Action(action_key)
            except ValueError:
                raise PermissionConfigError(f"Unknown action {action_key!r} in category {category.value!r}")
            try:
                cells[action] = tuple(Role(role) for role in roles)
            except ValueError:
                raise PermissionConfigError(f"Unknown role in {category.value}.{action.value}: {list(roles)!r}")
        matrix[category] = MappingProxyType(cells)

    missing = set(Category) - set(matrix)
    if missing:
        raise PermissionConfigError(f"Permission matrix is missing categories: {sorted(c.value for c in missing)}")
    return MappingProxyType(matrix)


_ADMIN = [Role.ADMIN]
_STAFF = [Role.ADMIN, Role.EMPLOYEE]

PERMISSION_MATRIX = build_permission_matrix({
    Category.USERS: {
        Action.VIEW: _ADMIN,
        Action.CREATE: _ADMIN,
        Action.UPDATE: _ADMIN,
        Action.DELETE: _ADMIN,
    },
    Category.PATIENTS: {
        Action.VIEW: _STAFF,
        Action.CREATE: _STAFF,
        Action.UPDATE: _STAFF,
        Action.DELETE: _ADMIN,  # employees cannot delete
    },
    Category.RECORDS: {
        Action.VIEW: _STAFF,
        Action.CREATE: _STAFF,
        Action.UPDATE: _STAFF,
        Action.DELETE: _ADMIN,
    },
    Category.TRANSFERS: {
        Action.VIEW: _STAFF,
        Action.CREATE: _STAFF,
        Action.UPDATE: _STAFF,
        Action.DELETE: _ADMIN,
        Action.RECEIVE: _STAFF,
        Action.COMPLETE: _STAFF,
    },
})


# --- Route tiers ---

PUBLIC_ROUTES = (
    "/api/login",
    "/api/static",
    "/api/static/types",
    "/api/static/{type}",
    "/api/static/{type}/{code}",
)

ADMIN_ONLY_ROUTES = (
    "/api/users",
    "/api/users/{id}",
)

SHARED_ROUTES = (
    "/api/profile",
    "/api/logout",
    "/api/patients",
    "/api/patients/{id}",
    "/api/records",
    "/api/records/{id}",
    "/api/transfers",
    "/api/transfers/{id}",
    "/api/transfers/{id}/receive",
    "/api/transfers/{id}/complete",
)


class RouteRule(NamedTuple):
    precedence: int
    tier: RouteTier
    pattern: str


def compile_route_rules(
    public: Iterable[str],
    admin_only: Iterable[str],
    shared: Iterable[str],
    allow_overlap: bool = False,
) -> Tuple[RouteRule, ...]:
    """Merge the three tier lists into one rule list ordered by precedence.

    Public beats AdminOnly beats Shared. Within a tier the longest pattern
    comes first so the matched rule is the most specific one. Patterns are
    literal prefixes; ``{id}`` style placeholders are not wildcards.
    """
    groups = [
        (0, RouteTier.PUBLIC, list(public)),
        (1, RouteTier.ADMIN_ONLY, list(admin_only)),
        (2, RouteTier.SHARED, list(shared)),
    ]

    if not allow_overlap:
        for i, (_, tier_a, patterns_a) in enumerate(groups):
            for _, tier_b, patterns_b in groups[i + 1:]:
                for a in patterns_a:
                    for b in patterns_b:
                        if a.startswith(b) or b.startswith(a):
                            raise PermissionConfigError(
                                f"Route pattern {a!r} ({tier_a.value}) overlaps {b!r} ({tier_b.value})"
                            )

    rules = [
        RouteRule(precedence, tier, pattern)
        for precedence, tier, patterns in groups
        for pattern in patterns
    ]
    rules.sort(key=lambda rule: (rule.precedence, -len(rule.pattern)))
    return tuple(rules)


ROUTE_RULES = compile_route_rules(PUBLIC_ROUTES, ADMIN_ONLY_ROUTES, SHARED_ROUTES)


# --- Backend endpoint table ---

class EndpointPermission(NamedTuple):
    roles: Tuple[Role, ...]
    public: bool


def _endpoint(roles: Sequence[Role] = (), public: bool = False) -> EndpointPermission:
    return EndpointPermission(tuple(roles), public)


ENDPOINT_PERMISSIONS: Mapping[str, EndpointPermission] = MappingProxyType({
    # Authentication
    "POST /api/login": _endpoint(public=True),
    "POST /api/register": _endpoint(_ADMIN),
    "POST /api/logout": _endpoint(_STAFF),
    "GET /api/profile": _endpoint(_STAFF),

    # Reference data
    "GET /api/static": _endpoint(public=True),
    "GET /api/static/types": _endpoint(public=True),
    "GET /api/static/{type}": _endpoint(public=True),
    "GET /api/static/{type}/{code}": _endpoint(public=True),

    # User management
    "GET /api/users": _endpoint(_ADMIN),
    "GET /api/users/{id}": _endpoint(_ADMIN),
    "POST /api/users": _endpoint(_ADMIN),
    "PUT /api/users/{id}": _endpoint(_ADMIN),
    "DELETE /api/users/{id}": _endpoint(_ADMIN),

    # Patients
    "GET /api/patients": _endpoint(_STAFF),
    "GET /api/patients/{id}": _endpoint(_STAFF),
    "POST /api/patients": _endpoint(_STAFF),
    "PUT /api/patients/{id}": _endpoint(_STAFF),
    "DELETE /api/patients/{id}": _endpoint(_ADMIN),

    # Medical records
    "GET /api/records": _endpoint(_STAFF),
    "GET /api/records/{id}": _endpoint(_STAFF),
    "POST /api/records": _endpoint(_STAFF),
    "PUT /api/records/{id}": _endpoint(_STAFF),
    "DELETE /api/records/{id}": _endpoint(_ADMIN),

    # Record transfers
    "GET /api/transfers": _endpoint(_STAFF),
    "GET /api/transfers/{id}": _endpoint(_STAFF),
    "POST /api/transfers": _endpoint(_STAFF),
    "PUT /api/transfers/{id}": _endpoint(_STAFF),
    "DELETE /api/transfers/{id}": _endpoint(_ADMIN),
    "POST /api/transfers/{id}/receive": _endpoint(_STAFF),
    "POST /api/transfers/{id}/complete": _endpoint(_STAFF),
})


# --- Navigation ---

class MenuEntry(NamedTuple):
    label: str
    path: str


NAVIGATION_MENU: Mapping[str, Tuple[MenuEntry, ...]] = MappingProxyType({
    # Every authenticated user
    "common": (
        MenuEntry("Dashboard", "/dashboard"),
        MenuEntry("Profile", "/profile"),
    ),
    "shared": (
        MenuEntry("Patients", "/patients"),
        MenuEntry("Medical Records", "/records"),
        MenuEntry("Record Transfers", "/transfers"),
    ),
    "admin_only": (
        MenuEntry("User Management", "/users"),
        MenuEntry("System Settings", "/settings"),
        MenuEntry("Audit Logs", "/audit"),
    ),
})

LOGIN_ROUTE = "/login"

DEFAULT_ROUTES: Mapping[Role, str] = MappingProxyType({
    Role.ADMIN: "/dashboard",
    Role.EMPLOYEE: "/patients",
})
