"""Authorization evaluator: role checks, the permission matrix and route tiers."""
from typing import Mapping, Optional, Sequence, Tuple, Union

from medgate.core.errors import PermissionConfigError
from medgate.core.logging_config import logger
from medgate.core.permissions import (
    ENDPOINT_PERMISSIONS,
    PERMISSION_MATRIX,
    ROUTE_RULES,
    Action,
    Category,
    EndpointPermission,
    PermissionMatrix,
    Role,
    RouteDecision,
    RouteRule,
    RouteTier,
)
from medgate.schemas import Principal


class AuthorizationEvaluator:
    """Answers role, action, endpoint and route questions for a principal.

    Every query is synchronous and pure for a given (principal, matrix)
    pair. A missing principal always gets the least-privileged answer.
    The only exception raised is ``PermissionConfigError``, for keys that
    are not part of the closed permission vocabulary.
    """

    def __init__(
        self,
        matrix: PermissionMatrix = PERMISSION_MATRIX,
        route_rules: Sequence[RouteRule] = ROUTE_RULES,
        endpoints: Mapping[str, EndpointPermission] = ENDPOINT_PERMISSIONS,
    ):
        self.matrix = matrix
        self.route_rules = tuple(route_rules)
        self.endpoints = endpoints

    # --- Roles ---

    def has_role(self, principal: Optional[Principal], role: Union[Role, str]) -> bool:
        """Exact match on the role field; no hierarchy, no wildcard."""
        if principal is None:
            return False
        return principal.role == role

    def is_admin(self, principal: Optional[Principal]) -> bool:
        return self.has_role(principal, Role.ADMIN)

    def is_employee(self, principal: Optional[Principal]) -> bool:
        return self.has_role(principal, Role.EMPLOYEE)

    # --- Permission matrix ---

    def allowed_roles(self, category: Union[Category, str], action: Union[Action, str]) -> Tuple[Role, ...]:
        """Return the matrix cell, raising for pairs outside the matrix."""
        try:
            category = Category(category)
            action = Action(action)
        except ValueError as exc:
            raise PermissionConfigError(f"Unknown permission key: {exc}") from exc

        cell = self.matrix.get(category, {}).get(action)
        if cell is None:
            raise PermissionConfigError(
                f"Action {action.value!r} is not defined for category {category.value!r}"
            )
        return cell

    def can_perform(
        self,
        principal: Optional[Principal],
        category: Union[Category, str],
        action: Union[Action, str],
    ) -> bool:
        allowed = self.allowed_roles(category, action)
        if principal is None:
            return False
        # Unrecognised roles match nothing in the cell
        return principal.role in allowed

    # --- Backend endpoints ---

    def can_call_endpoint(self, principal: Optional[Principal], method: str, endpoint: str) -> bool:
        """Check ``"<METHOD> <path template>"`` against the endpoint table."""
        key = f"{method.upper()} {endpoint}"
        permission = self.endpoints.get(key)
        if permission is None:
            raise PermissionConfigError(f"Unknown endpoint: {key!r}")
        if permission.public:
            return True
        if principal is None:
            return False
        return principal.role in permission.roles

    # --- Routes ---

    def match_route(self, path: str) -> Optional[RouteRule]:
        for rule in self.route_rules:
            if path.startswith(rule.pattern):
                return rule
        return None

    def route_tier(self, path: str) -> Optional[RouteTier]:
        rule = self.match_route(path)
        return rule.tier if rule else None

    def classify_route(self, principal: Optional[Principal], path: str) -> RouteDecision:
        rule = self.match_route(path)
        if rule is None:
            decision = False
        elif rule.tier is RouteTier.PUBLIC:
            decision = True
        elif rule.tier is RouteTier.ADMIN_ONLY:
            decision = self.is_admin(principal)
        else:
            decision = self.is_admin(principal) or self.is_employee(principal)

        result = RouteDecision.ALLOWED if decision else RouteDecision.DENIED
        logger.debug(
            f"Route {path!r} -> tier={rule.tier.value if rule else None}, "
            f"role={principal.role if principal else None}, decision={result.value}"
        )
        return result

    def can_access_route(self, principal: Optional[Principal], path: str) -> bool:
        return self.classify_route(principal, path) is RouteDecision.ALLOWED
