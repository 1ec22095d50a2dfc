"""API v1 routers."""

from laterooms.api.v1 import admin, auth, regions, rooms, secret_hotels, ws

__all__ = ["admin", "auth", "regions", "rooms", "secret_hotels", "ws"]
