"""
Navigation chrome: site links, active-link matching and the account menu.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import BaseModel

from techtales.kernel.identity.session_store import SessionStore

SCROLL_THRESHOLD = 10


@dataclass(frozen=True)
class NavLink:
    name: str
    href: str
    dropdown: Tuple["NavLink", ...] = ()


NAV_LINKS: Tuple[NavLink, ...] = (
    NavLink("Home", "/"),
    NavLink("Articles", "/articles"),
    NavLink("News", "/news"),
    NavLink(
        "Categories",
        "/categories",
        dropdown=(
            NavLink("Artificial Intelligence", "/category/artificial-intelligence"),
            NavLink("Web Development", "/category/web-development"),
            NavLink("Cybersecurity", "/category/cybersecurity"),
            NavLink("Quantum Computing", "/category/quantum-computing"),
        ),
    ),
    NavLink("About", "/about"),
)

AUTHENTICATED_MENU = (
    NavLink("Dashboard", "/dashboard"),
    NavLink("Profile", "/profile"),
    NavLink("Log out", "/logout"),
)
ANONYMOUS_MENU = (
    NavLink("Log in", "/login"),
    NavLink("Sign up", "/signup"),
)


def is_active(href: str, current_path: str) -> bool:
    """The home link matches only itself; other links match their whole subtree."""
    if href == "/":
        return current_path == href
    return current_path.startswith(href)


class NavItemView(BaseModel):
    name: str
    href: str
    active: bool
    children: List["NavItemView"] = []


class AccountView(BaseModel):
    name: str
    email: str
    avatar: Optional[str] = None


class NavigationView(BaseModel):
    links: List[NavItemView]
    account: Optional[AccountView] = None
    menu: List[NavItemView]
    scrolled: bool = False
    mobile_menu_open: bool = False


def _item(link: NavLink, current_path: str) -> NavItemView:
    return NavItemView(
        name=link.name,
        href=link.href,
        active=is_active(link.href, current_path),
        children=[_item(child, current_path) for child in link.dropdown],
    )


class NavigationMenu:
    """Navbar state. Reads the session store only to pick the account menu."""

    def __init__(self, session: SessionStore):
        self.session = session
        self.scrolled = False
        self.mobile_menu_open = False

    def set_scroll(self, y: float) -> bool:
        self.scrolled = y > SCROLL_THRESHOLD
        return self.scrolled

    def toggle_mobile_menu(self) -> bool:
        self.mobile_menu_open = not self.mobile_menu_open
        return self.mobile_menu_open

    def close_mobile_menu(self) -> None:
        self.mobile_menu_open = False

    def render(self, current_path: str = "/") -> NavigationView:
        user = self.session.user
        menu = AUTHENTICATED_MENU if user else ANONYMOUS_MENU
        return NavigationView(
            links=[_item(link, current_path) for link in NAV_LINKS],
            account=AccountView(name=user.name, email=user.email, avatar=user.avatar) if user else None,
            menu=[_item(link, current_path) for link in menu],
            scrolled=self.scrolled,
            mobile_menu_open=self.mobile_menu_open,
        )
