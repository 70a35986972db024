"""
Navigation chrome and notification endpoints.
"""

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from techtales.api.deps import Navigation, Notifications
from techtales.kernel.notifications import Notification
from techtales.views.navigation import NavigationView

router = APIRouter()


class NotificationResponse(BaseModel):
    kind: str
    message: str


@router.get("/navigation", response_model=NavigationView)
async def navigation(nav: Navigation, path: str = "/", scroll_y: float = 0):
    nav.set_scroll(scroll_y)
    return nav.render(path)


@router.post("/navigation/mobile-menu", response_model=NavigationView)
async def toggle_mobile_menu(nav: Navigation, path: str = "/"):
    nav.toggle_mobile_menu()
    return nav.render(path)


@router.get("/notifications", response_model=List[NotificationResponse])
async def drain_notifications(notifications: Notifications):
    """Pending toasts, oldest first. Reading them clears the queue."""
    drained: List[Notification] = notifications.drain()
    return [NotificationResponse(kind=n.kind.value, message=n.message) for n in drained]
