"""Unit tests for the profile page and its forms."""

import pytest
from pydantic import ValidationError

from techtales.schemas.forms import PasswordChange, ProfileUpdate, SignupForm
from techtales.views.profile import ProfilePage


class TestForms:
    """Form validation."""

    def test_signup_passwords_must_match(self):
        with pytest.raises(ValidationError, match="Passwords do not match"):
            SignupForm(name="Ada", email="ada@example.com", password="a", confirm_password="b", accept_terms=True)

    def test_signup_terms_must_be_accepted(self):
        with pytest.raises(ValidationError, match="terms"):
            SignupForm(name="Ada", email="ada@example.com", password="a", confirm_password="a")

    def test_profile_name_is_stripped(self):
        assert ProfileUpdate(name="  Jane  ").name == "Jane"
        with pytest.raises(ValidationError):
            ProfileUpdate(name="   ")

    def test_new_password_length(self):
        with pytest.raises(ValidationError, match="at least 8"):
            PasswordChange(current_password="password", new_password="short", confirm_password="short")


class TestProfilePage:
    """Profile updates go through the session store."""

    @pytest.mark.asyncio
    async def test_anonymous_requires_login(self, session_store, notifier):
        page = ProfilePage(session_store, notifier)

        assert page.requires_login is True
        assert await page.update_profile(ProfileUpdate(name="Nobody")) is None

    @pytest.mark.asyncio
    async def test_update_profile(self, jane_session, notifier, storage):
        page = ProfilePage(jane_session, notifier)

        user = await page.update_profile(ProfileUpdate(name="Jane S.", bio="Editor"))

        assert (user.name, user.bio, user.email) == ("Jane S.", "Editor", "jane@example.com")
        assert user.avatar == "https://i.pravatar.cc/150?u=jane"
        assert jane_session.user == user
        assert page.is_loading is False
        assert "Jane S." in storage.items["tech_blog_user"]

    @pytest.mark.asyncio
    async def test_change_password(self, jane_session, notifier):
        page = ProfilePage(jane_session, notifier)

        changed = await page.change_password(
            PasswordChange(current_password="password", new_password="new-secret", confirm_password="new-secret")
        )

        assert changed is True
        assert notifier.drain()[-1].message == "Password updated successfully"
        await jane_session.logout()
        user = await jane_session.login("jane@example.com", "new-secret")
        assert user.id == "2"

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, jane_session, notifier):
        page = ProfilePage(jane_session, notifier)

        changed = await page.change_password(
            PasswordChange(current_password="nope", new_password="new-secret", confirm_password="new-secret")
        )

        assert changed is False
        assert notifier.drain()[-1].message == "Current password is incorrect"
