"""
Authentication endpoints backed by the session store.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from techtales.api.deps import CurrentUser, Notifications, OptionalUser, Session
from techtales.kernel.identity.oauth import PROVIDER_FACTORIES
from techtales.schemas.common import SuccessResponse
from techtales.schemas.forms import PasswordChange, ProfileUpdate, SignupForm
from techtales.schemas.user import User, UserLogin
from techtales.views.profile import ProfilePage

router = APIRouter()


@router.post("/login", response_model=User)
async def login(data: UserLogin, session: Session):
    """Log in with an email/password pair from the known credential set."""
    return await session.login(data.email, data.password)


@router.post("/signup", response_model=User, status_code=status.HTTP_201_CREATED)
async def signup(data: SignupForm, session: Session):
    """Create an account and sign it in."""
    return await session.signup(data.name, data.email, data.password)


@router.post("/oauth/cancel", response_model=SuccessResponse)
async def cancel_oauth(session: Session):
    """Close the outstanding authorization window (the user gave up)."""
    if not session.cancel_external_auth():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No authorization window is open",
        )
    return SuccessResponse(message="Authorization window closed")


@router.post("/oauth/{provider}", response_model=User)
async def signup_with_provider(provider: str, session: Session):
    """
    Sign up through an external provider window.

    Resolves after the simulated authorization delay, or fails if the
    window is closed first.
    """
    provider = provider.lower()
    if provider not in PROVIDER_FACTORIES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown provider: {provider}",
        )
    if provider == "google":
        return await session.signup_with_google()
    return await session.signup_with_github()


@router.post("/logout", response_model=SuccessResponse)
async def logout(session: Session):
    """Clear the session. Succeeds when already logged out."""
    await session.logout()
    return SuccessResponse(message="Logged out successfully")


@router.get("/me", response_model=Optional[User])
async def get_current_session(user: OptionalUser):
    """Current user, or null when anonymous."""
    return user


@router.patch("/me", response_model=User)
async def update_profile(
    data: ProfileUpdate,
    user: CurrentUser,
    session: Session,
    notifications: Notifications,
):
    """Update name, bio and avatar of the current user."""
    updated = await ProfilePage(session, notifications).update_profile(data)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return updated


@router.post("/me/password", response_model=SuccessResponse)
async def change_password(
    data: PasswordChange,
    user: CurrentUser,
    session: Session,
    notifications: Notifications,
):
    """Change the current user's password."""
    if not await ProfilePage(session, notifications).change_password(data):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    return SuccessResponse(message="Password updated successfully")
