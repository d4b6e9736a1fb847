"""
单元测试：路由守卫（角色 × 路径前缀）
"""
import pytest

from placement_portal.app.routing import (
    LANDING_PATH,
    LOGIN_PATH,
    NAV_ITEMS,
    REGISTER_PATH,
    ROUTES,
    evaluate,
    home_path,
    nav_routes,
    normalize_path,
)
from placement_portal.domain.models import Role

PUBLIC = [LANDING_PATH, LOGIN_PATH, REGISTER_PATH]
ROLES = [None, Role.STUDENT, Role.COMPANY, Role.ADMIN]


@pytest.mark.parametrize("role", ROLES)
@pytest.mark.parametrize("path", PUBLIC)
def test_public_routes_always_allowed(role, path):
    decision = evaluate(path, role)
    assert decision.allowed
    assert decision.route.path == path


@pytest.mark.parametrize("role", ROLES)
@pytest.mark.parametrize("owner", list(Role))
def test_role_prefixed_routes(role, owner):
    for path in NAV_ITEMS[owner]:
        decision = evaluate(path, role)
        if role is owner:
            assert decision.allowed
            assert decision.route.path == path
        else:
            assert not decision.allowed
            assert decision.route.path == home_path(role)


def test_anonymous_redirects_to_landing():
    decision = evaluate("/admin/users", None)
    assert not decision.allowed
    assert decision.route.path == "/"


def test_student_on_admin_route_goes_to_student_dashboard():
    decision = evaluate("/admin/stats", Role.STUDENT)
    assert decision.route.path == "/student/dashboard"


class TestNormalizePath:

    def test_known_path_untouched(self):
        assert normalize_path("/company/post-job") == "/company/post-job"

    def test_trailing_slash(self):
        assert normalize_path("/student/jobs/") == "/student/jobs"

    def test_unknown_under_prefix_goes_to_dashboard(self):
        assert normalize_path("/company/nope") == "/company/dashboard"

    def test_unknown_elsewhere_goes_to_landing(self):
        assert normalize_path("/whatever") == "/"
        assert normalize_path("") == "/"


def test_every_role_has_navigation_and_dashboard():
    for role in Role:
        routes = nav_routes(role)
        assert routes[0].path == role.dashboard_path
        assert all(r.roles == frozenset({role}) for r in routes)


def test_route_scripts_are_unique():
    scripts = [r.script for r in ROUTES.values()]
    assert len(scripts) == len(set(scripts))
