"""
Session store: the single source of truth for who is logged in.

One instance is owned by the application and handed to views and handlers
explicitly. The current user can only be changed through the operations below.
Every identity change writes a full JSON snapshot to durable storage.
"""

import asyncio
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from techtales.config import get_settings
from techtales.errors import AuthError, DuplicateEmail, InvalidCredentials
from techtales.kernel.identity.credentials import CredentialSet, avatar_for
from techtales.kernel.identity.oauth import (
    AuthWindow,
    BrowserWindowOpener,
    OAuthProvider,
    WindowFeatures,
    WindowOpener,
    await_authorization,
    github_provider,
    google_provider,
    open_auth_window,
)
from techtales.kernel.identity.storage import SessionStorage
from techtales.kernel.notifications import NotificationKind, Notifier
from techtales.logging_config import get_logger, session_user_var
from techtales.schemas.user import User, UserRole, UserUpdate

logger = get_logger(__name__)


class SessionStore:
    """
    Holds the current user and persists it across restarts.

    Usage:
        store = SessionStore(storage, notifier)
        await store.restore()
        user = await store.login("jane@example.com", "password")
    """

    def __init__(
        self,
        storage: SessionStorage,
        notifier: Notifier,
        credentials: Optional[CredentialSet] = None,
        window_opener: Optional[WindowOpener] = None,
        *,
        latency: Optional[float] = None,
        oauth_timeout: Optional[float] = None,
        storage_key: Optional[str] = None,
    ):
        settings = get_settings()
        self.storage = storage
        self.notifier = notifier
        self.credentials = credentials or CredentialSet()
        self.window_opener = window_opener or BrowserWindowOpener()
        self.latency = settings.simulated_latency_seconds if latency is None else latency
        self.oauth_timeout = settings.oauth_timeout_seconds if oauth_timeout is None else oauth_timeout
        self.storage_key = storage_key or settings.session_storage_key
        self.redirect_uri = settings.oauth_redirect_uri
        self.window_features = WindowFeatures.from_settings(settings)
        self._settings = settings

        self._user: Optional[User] = None
        self._is_loading = True
        self._lock = asyncio.Lock()
        self._auth_window: Optional[AuthWindow] = None

    # Read API

    @property
    def user(self) -> Optional[User]:
        """Copy of the current user, or None when anonymous."""
        return self._user.model_copy() if self._user else None

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def auth_in_progress(self) -> bool:
        return self._auth_window is not None

    # Startup

    async def restore(self) -> Optional[User]:
        """
        Load the persisted session once at startup.

        A malformed record is removed and the session stays anonymous.
        """
        async with self._lock:
            try:
                raw = await self.storage.get_item(self.storage_key)
                if raw:
                    try:
                        self._set_user(User.model_validate_json(raw))
                        logger.info("Session restored", extra={"user_id": self._user.id})
                    except ValidationError:
                        logger.warning("Discarding malformed session record")
                        await self.storage.remove_item(self.storage_key)
                        self._set_user(None)
            finally:
                self._is_loading = False
            return self.user

    # Identity operations

    async def login(self, email: str, password: str) -> User:
        """
        Authenticate against the credential set.

        Raises:
            InvalidCredentials: no matching email/password pair
        """
        async with self._lock:
            self._is_loading = True
            try:
                await asyncio.sleep(self.latency)
                user = self.credentials.authenticate(email, password)
                if user is None:
                    logger.info("Login rejected", extra={"email": email})
                    self.notifier.notify(NotificationKind.ERROR, "Invalid email or password")
                    raise InvalidCredentials()

                await self._persist(user)
                logger.info("User logged in", extra={"user_id": user.id})
                self.notifier.notify(NotificationKind.SUCCESS, "Logged in successfully")
                return user.model_copy()
            finally:
                self._is_loading = False

    async def signup(self, name: str, email: str, password: str) -> User:
        """
        Create an account with role 'user' and sign it in.

        Raises:
            DuplicateEmail: the email is already known
        """
        async with self._lock:
            self._is_loading = True
            try:
                await asyncio.sleep(self.latency)
                if self.credentials.contains_email(email):
                    self.notifier.notify(
                        NotificationKind.ERROR, "User with this email already exists"
                    )
                    raise DuplicateEmail(email)

                user = User(
                    id=str(len(self.credentials) + 1),
                    name=name,
                    email=email,
                    role=UserRole.USER,
                    avatar=avatar_for(email),
                )
                self.credentials.add(user, password)
                await self._persist(user)
                logger.info("User signed up", extra={"user_id": user.id})
                self.notifier.notify(NotificationKind.SUCCESS, "Account created successfully")
                return user.model_copy()
            finally:
                self._is_loading = False

    async def signup_with_google(self) -> User:
        """Sign up through the Google authorization window."""
        return await self._signup_with_provider(google_provider(self._settings))

    async def signup_with_github(self) -> User:
        """Sign up through the GitHub authorization window."""
        return await self._signup_with_provider(github_provider(self._settings))

    def cancel_external_auth(self) -> bool:
        """Close the outstanding authorization window, if any."""
        window = self._auth_window
        if window is None or window.closed:
            return False
        window.close()
        return True

    async def logout(self) -> None:
        """Clear the session. Safe to call when already anonymous."""
        async with self._lock:
            previous = self._user
            self._set_user(None)
            await self.storage.remove_item(self.storage_key)
            if previous:
                logger.info("User logged out", extra={"user_id": previous.id})
            self.notifier.notify(NotificationKind.SUCCESS, "Logged out successfully")

    async def update_user(
        self,
        patch: Union[UserUpdate, Mapping[str, Any]],
    ) -> Optional[User]:
        """
        Overwrite the current user's mutable fields with those set in patch.
        A null for a required field (name) leaves that field unchanged.

        Returns None without touching anything when nobody is logged in.
        """
        async with self._lock:
            if self._user is None:
                logger.warning("update_user called without a session")
                return None

            if not isinstance(patch, UserUpdate):
                patch = UserUpdate.model_validate(dict(patch))
            changes: Dict[str, Any] = {
                field: value
                for field, value in patch.model_dump(exclude_unset=True).items()
                if value is not None or not User.model_fields[field].is_required()
            }
            # Re-validate so the snapshot always rehydrates through restore()
            updated = User.model_validate({**self._user.model_dump(), **changes})

            await self._persist(updated)
            logger.info(
                "User updated",
                extra={"user_id": updated.id, "fields": sorted(changes)},
            )
            self.notifier.notify(NotificationKind.SUCCESS, "User updated successfully")
            return updated.model_copy()

    # Internals

    async def _signup_with_provider(self, provider: OAuthProvider) -> User:
        async with self._lock:
            self._is_loading = True
            try:
                window = open_auth_window(
                    provider,
                    self.window_opener,
                    self.redirect_uri,
                    self.window_features,
                )
                self._auth_window = window
                user = await await_authorization(provider, window, self.oauth_timeout)
                await self._persist(user)
                logger.info(
                    "User signed up via provider",
                    extra={"user_id": user.id, "provider": provider.slug},
                )
                self.notifier.notify(
                    NotificationKind.SUCCESS,
                    f"Signed up with {provider.name} successfully",
                )
                return user.model_copy()
            except AuthError as exc:
                logger.warning("%s auth error: %s", provider.name, exc)
                self.notifier.notify(
                    NotificationKind.ERROR,
                    f"Failed to sign up with {provider.name}",
                )
                raise
            finally:
                self._auth_window = None
                self._is_loading = False

    async def _persist(self, user: User) -> None:
        await self.storage.set_item(self.storage_key, user.model_dump_json())
        self._set_user(user)

    def _set_user(self, user: Optional[User]) -> None:
        self._user = user
        session_user_var.set(user.id if user else None)

