"""Capability projection, navigation menu and landing route."""
from medgate.core.permissions import LOGIN_ROUTE, NAVIGATION_MENU
from medgate.schemas import CapabilitySet, Principal
from medgate.services.authorization import AuthorizationEvaluator
from medgate.services.projections import CAPABILITY_FLAGS, NO_CAPABILITIES, CapabilityProjector


class CountingEvaluator(AuthorizationEvaluator):
    def __init__(self):
        super().__init__()
        self.calls = 0

    def can_perform(self, principal, category, action):
        self.calls += 1
        return super().can_perform(principal, category, action)


def paths(menu, group=None):
    return [item.path for item in menu if group is None or item.group == group]


class TestCapabilities:

    def test_no_principal_gets_all_false_without_evaluating(self):
        evaluator = CountingEvaluator()
        projector = CapabilityProjector(evaluator)
        caps = projector.capabilities(None)
        assert caps is NO_CAPABILITIES
        assert not any(caps.model_dump().values())
        assert evaluator.calls == 0

    def test_admin_has_every_flag(self, evaluator, admin):
        caps = CapabilityProjector(evaluator).capabilities(admin)
        assert caps.is_admin and not caps.is_employee
        assert all(getattr(caps, flag) for flag in CAPABILITY_FLAGS)

    def test_employee_flags_follow_matrix(self, evaluator, employee):
        caps = CapabilityProjector(evaluator).capabilities(employee)
        assert caps.is_employee and not caps.is_admin
        assert caps.can_view_patients
        assert caps.can_receive_transfers and caps.can_complete_transfers
        assert not caps.can_view_users
        assert not caps.can_delete_records

    def test_each_flag_agrees_with_evaluator(self, evaluator, employee):
        caps = CapabilityProjector(evaluator).capabilities(employee)
        for flag, (category, action) in CAPABILITY_FLAGS.items():
            assert getattr(caps, flag) == evaluator.can_perform(employee, category, action), flag

    def test_unknown_role_gets_nothing(self, evaluator):
        caps = CapabilityProjector(evaluator).capabilities(Principal(id=3, role="auditor"))
        assert caps == CapabilitySet()

    def test_same_principal_returns_same_object(self, employee):
        evaluator = CountingEvaluator()
        projector = CapabilityProjector(evaluator)
        first = projector.capabilities(employee)
        calls = evaluator.calls
        assert projector.capabilities(employee) is first
        assert evaluator.calls == calls

    def test_equal_but_distinct_principal_recomputes(self):
        evaluator = CountingEvaluator()
        projector = CapabilityProjector(evaluator)
        first = projector.capabilities(Principal(id=2, role="employee"))
        second = projector.capabilities(Principal(id=2, role="employee"))
        assert second is not first
        assert second == first
        assert evaluator.calls == 2 * len(CAPABILITY_FLAGS)

    def test_switching_principal_changes_result(self, evaluator, admin, employee):
        projector = CapabilityProjector(evaluator)
        assert projector.capabilities(admin).can_view_users
        assert not projector.capabilities(employee).can_view_users


class TestNavigationMenu:

    def test_admin_sees_all_groups(self, evaluator, admin):
        menu = CapabilityProjector(evaluator).navigation_menu(admin)
        assert {item.group for item in menu} == {"common", "shared", "admin_only"}
        assert len(menu) == sum(len(entries) for entries in NAVIGATION_MENU.values())

    def test_employee_has_no_admin_items(self, evaluator, employee):
        menu = CapabilityProjector(evaluator).navigation_menu(employee)
        assert paths(menu, "admin_only") == []
        assert paths(menu, "shared") == [entry.path for entry in NAVIGATION_MENU["shared"]]

    def test_unknown_role_sees_common_only(self, evaluator):
        menu = CapabilityProjector(evaluator).navigation_menu(Principal(id=3, role="guest"))
        assert {item.group for item in menu} == {"common"}

    def test_no_principal_gets_empty_menu(self, evaluator):
        assert CapabilityProjector(evaluator).navigation_menu(None) == []

    def test_menu_is_memoised_on_identity(self, evaluator, admin):
        projector = CapabilityProjector(evaluator)
        assert projector.navigation_menu(admin) is projector.navigation_menu(admin)


class TestDefaultRoute:

    def test_by_role(self, evaluator, admin, employee):
        projector = CapabilityProjector(evaluator)
        assert projector.default_route(admin) == "/dashboard"
        assert projector.default_route(employee) == "/patients"

    def test_falls_back_to_login(self, evaluator):
        projector = CapabilityProjector(evaluator)
        assert projector.default_route(None) == LOGIN_ROUTE
        assert projector.default_route(Principal(id=3, role="guest")) == LOGIN_ROUTE


class TestSharedProjector:

    def test_memo_entries_stay_paired(self, evaluator, admin, employee):
        projector = CapabilityProjector(evaluator)
        admin_caps = projector.capabilities(admin)
        employee_caps = projector.capabilities(employee)

        assert projector.capabilities(employee) is employee_caps
        assert projector.capabilities(admin) == admin_caps
        assert projector.capabilities(admin).can_view_users
        assert not projector.capabilities(employee).can_view_users
