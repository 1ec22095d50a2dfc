"""Header and admin layout view models."""

from pydantic import BaseModel

from laterooms.schemas.user import AuthUser


class NavLink(BaseModel):
    href: str
    label: str
    active: bool = False


class HeaderView(BaseModel):
    """Site header: who is signed in and which links to show."""

    signed_in: bool
    user: AuthUser | None = None
    links: list[NavLink]

    @classmethod
    def for_user(cls, user: AuthUser | None) -> "HeaderView":
        links = [
            NavLink(href="/", label="Browse Rooms"),
            NavLink(href="/secret-hotels", label="🔮 Secret Hotels"),
        ]
        if user:
            links += [
                NavLink(href="/my-bids", label="My Bids"),
                NavLink(href="/my-bookings", label="My Bookings"),
                NavLink(href="/logout", label="Sign Out"),
            ]
        else:
            links += [
                NavLink(href="/login", label="Sign In"),
                NavLink(href="/signup", label="Sign Up"),
            ]
        return cls(signed_in=user is not None, user=user, links=links)


ADMIN_NAV = [
    ("/admin", "📊 Dashboard"),
    ("/admin/rooms", "🏨 Room Auctions"),
    ("/admin/secret-hotels", "🔮 Secret Hotels"),
    ("/admin/bookings", "📋 Bookings"),
]


class AdminLayoutView(BaseModel):
    """Partner portal chrome: navigation with the current page highlighted."""

    company_name: str | None
    nav: list[NavLink]

    @classmethod
    def for_path(cls, path: str, company_name: str | None) -> "AdminLayoutView":
        return cls(
            company_name=company_name,
            nav=[NavLink(href=href, label=label, active=href == path) for href, label in ADMIN_NAV],
        )
