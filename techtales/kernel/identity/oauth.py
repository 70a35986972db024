"""
Simulated OAuth signup through an external authorization window.

No token is exchanged. The window is opened on the provider's authorize URL,
then two completion sources race:

- a fixed timer, which stands for the provider completing successfully
- the window-closed signal, which means the user gave up

Whichever settles first wins and the other task is cancelled.
"""

import asyncio
import uuid
import webbrowser
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple
from urllib.parse import quote, urlencode

from techtales.config import Settings, get_settings
from techtales.errors import AuthCancelled
from techtales.kernel.identity.credentials import avatar_for
from techtales.logging_config import get_logger
from techtales.schemas.user import User, UserRole

logger = get_logger(__name__)


@dataclass(frozen=True)
class OAuthProvider:
    """Authorize endpoint and fixed request parameters of one provider."""
    name: str
    authorize_url: str
    client_id: str
    scope: str
    extra_params: Tuple[Tuple[str, str], ...] = ()

    @property
    def slug(self) -> str:
        return self.name.lower()

    def build_url(self, redirect_uri: str) -> str:
        params = [
            ("client_id", self.client_id),
            ("redirect_uri", redirect_uri),
            ("scope", self.scope),
            *self.extra_params,
        ]
        return f"{self.authorize_url}?{urlencode(params, quote_via=quote)}"


def google_provider(settings: Optional[Settings] = None) -> OAuthProvider:
    settings = settings or get_settings()
    return OAuthProvider(
        name="Google",
        authorize_url="https://accounts.google.com/o/oauth2/v2/auth",
        client_id=settings.google_client_id,
        scope="profile email",
        extra_params=(("response_type", "token"),),
    )


def github_provider(settings: Optional[Settings] = None) -> OAuthProvider:
    settings = settings or get_settings()
    return OAuthProvider(
        name="GitHub",
        authorize_url="https://github.com/login/oauth/authorize",
        client_id=settings.github_client_id,
        scope="user:email",
    )


PROVIDER_FACTORIES = {
    "google": google_provider,
    "github": github_provider,
}


def get_provider(slug: str, settings: Optional[Settings] = None) -> OAuthProvider:
    """Look up a provider by slug ('google' or 'github')."""
    try:
        factory = PROVIDER_FACTORIES[slug.lower()]
    except KeyError:
        raise ValueError(f"Unknown OAuth provider: {slug}") from None
    return factory(settings)


@dataclass(frozen=True)
class WindowFeatures:
    """Size and position of the authorization window."""
    width: int
    height: int
    left: int
    top: int

    @classmethod
    def centered(
        cls,
        width: int,
        height: int,
        screen_width: int,
        screen_height: int,
    ) -> "WindowFeatures":
        return cls(
            width=width,
            height=height,
            left=screen_width // 2 - width // 2,
            top=screen_height // 2 - height // 2,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "WindowFeatures":
        settings = settings or get_settings()
        return cls.centered(
            settings.popup_width,
            settings.popup_height,
            settings.screen_width,
            settings.screen_height,
        )

    def as_feature_string(self) -> str:
        return f"width={self.width},height={self.height},left={self.left},top={self.top}"


class AuthWindow(Protocol):
    """Handle to an opened authorization window."""

    @property
    def closed(self) -> bool:
        ...

    async def wait_closed(self) -> None:
        ...

    def close(self) -> None:
        ...


class ManagedAuthWindow:
    """Authorization window whose closure is signalled through an asyncio.Event."""

    def __init__(self, url: str, name: str):
        self.url = url
        self.name = name
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    async def wait_closed(self) -> None:
        await self._closed.wait()

    def close(self) -> None:
        self._closed.set()


class WindowOpener(Protocol):
    """Opens authorization windows. Returns None when the window is blocked."""

    def open(self, url: str, name: str, features: WindowFeatures) -> Optional[AuthWindow]:
        ...


class BrowserWindowOpener:
    """Opens the authorize URL in the host's web browser."""

    def open(self, url: str, name: str, features: WindowFeatures) -> Optional[AuthWindow]:
        # The webbrowser module ignores geometry; features are only logged
        if not webbrowser.open(url, new=1):
            return None
        logger.debug("Opened %s (%s)", name, features.as_feature_string())
        return ManagedAuthWindow(url, name)


def synthesize_user(provider: OAuthProvider) -> User:
    """Random user record for a completed provider signup."""
    random_id = uuid.uuid4().hex[:13]
    return User(
        id=random_id,
        name=f"{provider.name} User",
        email=f"user_{random_id}@{provider.slug}.com",
        role=UserRole.USER,
        avatar=avatar_for(f"{provider.slug}_{random_id}"),
    )


def open_auth_window(
    provider: OAuthProvider,
    opener: WindowOpener,
    redirect_uri: str,
    features: WindowFeatures,
) -> AuthWindow:
    """Open the provider window; raise AuthCancelled if it was blocked."""
    window = opener.open(
        provider.build_url(redirect_uri),
        f"{provider.name}AuthPopup",
        features,
    )
    if window is None:
        raise AuthCancelled(provider.name, "popup was blocked or closed")
    return window


async def await_authorization(
    provider: OAuthProvider,
    window: AuthWindow,
    timeout: float,
) -> User:
    """
    Race the success timer against the window being closed.

    Raises:
        AuthCancelled: the window closed before the timer fired
    """
    timer = asyncio.create_task(asyncio.sleep(timeout), name=f"{provider.slug}-auth-timer")
    closed = asyncio.create_task(window.wait_closed(), name=f"{provider.slug}-auth-closed")
    try:
        done, _ = await asyncio.wait({timer, closed}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (timer, closed):
            if not task.done():
                task.cancel()
        await asyncio.gather(timer, closed, return_exceptions=True)

    if timer not in done:
        raise AuthCancelled(provider.name)

    user = synthesize_user(provider)
    if not window.closed:
        window.close()
    return user


async def run_oauth_flow(
    provider: OAuthProvider,
    opener: WindowOpener,
    *,
    timeout: Optional[float] = None,
    redirect_uri: Optional[str] = None,
    features: Optional[WindowFeatures] = None,
) -> User:
    """Open the provider window and wait for the simulated authorization."""
    settings = get_settings()
    window = open_auth_window(
        provider,
        opener,
        redirect_uri or settings.oauth_redirect_uri,
        features or WindowFeatures.from_settings(settings),
    )
    return await await_authorization(
        provider,
        window,
        settings.oauth_timeout_seconds if timeout is None else timeout,
    )
