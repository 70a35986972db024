"""
Profile settings page.
"""

import asyncio
from typing import Optional

from techtales.kernel.identity.session_store import SessionStore
from techtales.kernel.notifications import NotificationKind, Notifier
from techtales.logging_config import get_logger
from techtales.schemas.forms import PasswordChange, ProfileUpdate
from techtales.schemas.user import User, UserUpdate

logger = get_logger(__name__)


class ProfilePage:
    """Edits the current user's name, bio, avatar and password."""

    def __init__(self, session: SessionStore, notifier: Notifier, latency: float = 0.0):
        self.session = session
        self.notifier = notifier
        self.latency = latency
        self.is_loading = False

    @property
    def requires_login(self) -> bool:
        return not self.session.is_authenticated

    async def update_profile(self, form: ProfileUpdate) -> Optional[User]:
        """Apply the form to the session user. Returns None when nobody is logged in."""
        if self.requires_login:
            return None
        self.is_loading = True
        try:
            await asyncio.sleep(self.latency)
            return await self.session.update_user(
                UserUpdate(**form.model_dump(exclude_unset=True))
            )
        finally:
            self.is_loading = False

    async def change_password(self, form: PasswordChange) -> bool:
        """Change the session user's password in the credential set."""
        user = self.session.user
        if user is None:
            return False
        self.is_loading = True
        try:
            await asyncio.sleep(self.latency)
            changed = self.session.credentials.change_password(
                user.email, form.current_password, form.new_password
            )
        finally:
            self.is_loading = False

        if not changed:
            logger.info("Password change rejected", extra={"user_id": user.id})
            self.notifier.notify(NotificationKind.ERROR, "Current password is incorrect")
            return False
        logger.info("Password changed", extra={"user_id": user.id})
        self.notifier.notify(NotificationKind.SUCCESS, "Password updated successfully")
        return True
