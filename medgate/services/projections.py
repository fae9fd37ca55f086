"""Capability flags, navigation menu and landing route derived from a principal."""
from typing import Dict, List, Optional, Tuple

from medgate.core.logging_config import logger
from medgate.core.permissions import (
    DEFAULT_ROUTES,
    LOGIN_ROUTE,
    NAVIGATION_MENU,
    Action,
    Category,
    Role,
)
from medgate.schemas import CapabilitySet, MenuItem, Principal
from medgate.services.authorization import AuthorizationEvaluator

# Capability flag -> matrix cell it is read from
CAPABILITY_FLAGS: Dict[str, Tuple[Category, Action]] = {
    "can_view_users": (Category.USERS, Action.VIEW),
    "can_create_users": (Category.USERS, Action.CREATE),
    "can_update_users": (Category.USERS, Action.UPDATE),
    "can_delete_users": (Category.USERS, Action.DELETE),
    "can_view_patients": (Category.PATIENTS, Action.VIEW),
    "can_create_patients": (Category.PATIENTS, Action.CREATE),
    "can_update_patients": (Category.PATIENTS, Action.UPDATE),
    "can_delete_patients": (Category.PATIENTS, Action.DELETE),
    "can_view_records": (Category.RECORDS, Action.VIEW),
    "can_create_records": (Category.RECORDS, Action.CREATE),
    "can_update_records": (Category.RECORDS, Action.UPDATE),
    "can_delete_records": (Category.RECORDS, Action.DELETE),
    "can_view_transfers": (Category.TRANSFERS, Action.VIEW),
    "can_create_transfers": (Category.TRANSFERS, Action.CREATE),
    "can_update_transfers": (Category.TRANSFERS, Action.UPDATE),
    "can_delete_transfers": (Category.TRANSFERS, Action.DELETE),
    "can_receive_transfers": (Category.TRANSFERS, Action.RECEIVE),
    "can_complete_transfers": (Category.TRANSFERS, Action.COMPLETE),
}

NO_CAPABILITIES = CapabilitySet()


class CapabilityProjector:
    """Projects the evaluator's answers into flat view-model data.

    Results are memoised on principal identity: asking again with the same
    principal object returns the very same result object, and a different
    object (even an equal one) triggers a recompute. Each memo is one
    (principal, result) tuple replaced whole, so a projector can be shared
    between request threads.
    """

    def __init__(self, evaluator: AuthorizationEvaluator):
        self.evaluator = evaluator
        self._capabilities_memo: Tuple[Optional[Principal], CapabilitySet] = (None, NO_CAPABILITIES)
        self._menu_memo: Tuple[Optional[Principal], List[MenuItem]] = (None, [])

    def capabilities(self, principal: Optional[Principal]) -> CapabilitySet:
        if principal is None:
            return NO_CAPABILITIES
        memo_for, memo = self._capabilities_memo
        if principal is memo_for:
            return memo

        flags = {
            name: self.evaluator.can_perform(principal, category, action)
            for name, (category, action) in CAPABILITY_FLAGS.items()
        }
        capabilities = CapabilitySet(
            is_admin=self.evaluator.is_admin(principal),
            is_employee=self.evaluator.is_employee(principal),
            **flags,
        )
        self._capabilities_memo = (principal, capabilities)
        logger.debug(f"Capabilities recomputed for principal id={principal.id}, role={principal.role}")
        return capabilities

    def navigation_menu(self, principal: Optional[Principal]) -> List[MenuItem]:
        if principal is None:
            return []
        memo_for, memo = self._menu_memo
        if principal is memo_for:
            return memo

        is_admin = self.evaluator.is_admin(principal)
        groups = ["common"]
        if is_admin or self.evaluator.is_employee(principal):
            groups.append("shared")
        if is_admin:
            groups.append("admin_only")

        menu = [
            MenuItem(label=entry.label, path=entry.path, group=group)
            for group in groups
            for entry in NAVIGATION_MENU[group]
        ]
        self._menu_memo = (principal, menu)
        return menu

    def default_route(self, principal: Optional[Principal]) -> str:
        if principal is None:
            return LOGIN_ROUTE
        try:
            return DEFAULT_ROUTES[Role(principal.role)]
        except (ValueError, KeyError):
            return LOGIN_ROUTE
