"""Route table and the role-based route guard.

Paths mirror the browser routes of the portal (``/student/jobs`` ...). Each
route maps to a Streamlit page script so the web layer can ``switch_page``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from ..domain.models import Role
from ..infra.exceptions import ConfigError

LANDING_PATH = "/"
LOGIN_PATH = "/login"
REGISTER_PATH = "/register"


@dataclass(frozen=True)
class Route:
    path: str
    title: str
    script: str
    roles: Optional[FrozenSet[Role]] = None  # None = public

    @property
    def is_public(self) -> bool:
        return self.roles is None


def _role_route(role: Role, slug: str, title: str, script: str) -> Route:
    return Route(f"{role.prefix}/{slug}", title, script, frozenset({role}))


ROUTES: Dict[str, Route] = {r.path: r for r in (
    Route(LANDING_PATH, "Home", "app.py"),
    Route(LOGIN_PATH, "Sign in", "pages/01_Login.py"),
    Route(REGISTER_PATH, "Register", "pages/02_Register.py"),
    _role_route(Role.STUDENT, "dashboard", "Overview", "pages/10_Student_Dashboard.py"),
    _role_route(Role.STUDENT, "profile", "Profile", "pages/11_Student_Profile.py"),
    _role_route(Role.STUDENT, "jobs", "Jobs", "pages/12_Student_Jobs.py"),
    _role_route(Role.STUDENT, "applications", "My Applications", "pages/13_Student_Applications.py"),
    _role_route(Role.COMPANY, "dashboard", "Overview", "pages/20_Company_Dashboard.py"),
    _role_route(Role.COMPANY, "post-job", "Post Job", "pages/21_Company_Post_Job.py"),
    _role_route(Role.COMPANY, "jobs", "My Jobs", "pages/22_Company_Jobs.py"),
    _role_route(Role.COMPANY, "candidates", "Candidates", "pages/23_Company_Candidates.py"),
    _role_route(Role.ADMIN, "dashboard", "Overview", "pages/30_Admin_Dashboard.py"),
    _role_route(Role.ADMIN, "users", "User Management", "pages/31_Admin_Users.py"),
    _role_route(Role.ADMIN, "jobs", "All Jobs", "pages/32_Admin_Jobs.py"),
    _role_route(Role.ADMIN, "stats", "Statistics", "pages/33_Admin_Stats.py"),
)}

# sidebar order per role
NAV_ITEMS: Mapping[Role, Tuple[str, ...]] = {
    Role.STUDENT: ("/student/dashboard", "/student/profile", "/student/jobs", "/student/applications"),
    Role.COMPANY: ("/company/dashboard", "/company/post-job", "/company/jobs", "/company/candidates"),
    Role.ADMIN: ("/admin/dashboard", "/admin/users", "/admin/jobs", "/admin/stats"),
}

# every Role member must be handled by the per-role tables
_missing = set(Role) - set(NAV_ITEMS)
if _missing:
    raise ConfigError(f"Navigation not defined for roles: {sorted(r.value for r in _missing)}")
for _role in Role:
    if _role.dashboard_path not in ROUTES:
        raise ConfigError(f"Dashboard route missing for role {_role.value}")


def nav_routes(role: Role) -> Tuple[Route, ...]:
    return tuple(ROUTES[p] for p in NAV_ITEMS[role])


def _role_for_prefix(path: str) -> Optional[Role]:
    head = path.strip("/").split("/", 1)[0]
    for role in Role:
        if head == role.value:
            return role
    return None


def normalize_path(path: str) -> str:
    """Resolve ``path`` to a known route.

    Unknown paths under a role prefix fall back to that prefix's dashboard,
    anything else unknown falls back to the landing page.
    """
    p = "/" + (path or "").strip().strip("/")
    if p in ROUTES:
        return p
    role = _role_for_prefix(p)
    if role is not None:
        return role.dashboard_path
    return LANDING_PATH


class GuardState(Enum):
    ALLOWED = "allowed"
    REDIRECTED = "redirected"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    route: Route  # the route to render (ALLOWED) or redirect to (REDIRECTED)

    @property
    def allowed(self) -> bool:
        return self.state is GuardState.ALLOWED


def home_path(role: Optional[Role]) -> str:
    return role.dashboard_path if role is not None else LANDING_PATH


def evaluate(path: str, role: Optional[Role]) -> GuardDecision:
    """Decide whether ``role`` (None = anonymous) may view ``path``.

    Stateless: callers evaluate on every navigation.
    """
    route = ROUTES[normalize_path(path)]
    if route.is_public or (role is not None and role in route.roles):
        return GuardDecision(GuardState.ALLOWED, route)
    return GuardDecision(GuardState.REDIRECTED, ROUTES[home_path(role)])
