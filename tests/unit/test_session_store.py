"""Unit tests for the session store."""

import asyncio
import json

import pytest

from techtales.errors import AuthCancelled, DuplicateEmail, InvalidCredentials
from techtales.kernel.identity.credentials import DEFAULT_ACCOUNTS
from techtales.kernel.identity.session_store import SessionStore
from techtales.kernel.identity.storage import MemorySessionStorage
from techtales.kernel.notifications import NotificationKind
from techtales.schemas.user import User, UserRole, UserUpdate

from conftest import FakeWindowOpener

KEY = "tech_blog_user"


def stored_user(storage: MemorySessionStorage):
    raw = storage.items.get(KEY)
    return User.model_validate_json(raw) if raw else None


class TestRestore:
    """Rehydrating the durable session record at startup."""

    @pytest.mark.asyncio
    async def test_missing_record_is_anonymous(self, session_store: SessionStore):
        assert session_store.user is None
        assert session_store.is_authenticated is False
        assert session_store.is_loading is False

    @pytest.mark.asyncio
    async def test_valid_record_restores_user(self, notifier, credentials):
        jane = User(id="2", name="Jane Smith", email="jane@example.com", role=UserRole.AUTHOR)
        storage = MemorySessionStorage({KEY: jane.model_dump_json()})
        store = SessionStore(storage, notifier, credentials, latency=0)

        assert await store.restore() == jane
        assert store.is_authenticated is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["{not json", '{"name": "No id"}', "[]"])
    async def test_malformed_record_is_cleared(self, notifier, credentials, raw):
        storage = MemorySessionStorage({KEY: raw})
        store = SessionStore(storage, notifier, credentials, latency=0)

        assert await store.restore() is None
        assert KEY not in storage.items


class TestLogin:
    """Login against the fixed credential set."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("account", DEFAULT_ACCOUNTS, ids=lambda a: a[2])
    async def test_valid_pairs_set_and_persist_user(self, session_store, storage, account):
        user_id, name, email, password, role = account

        user = await session_store.login(email, password)

        assert (user.id, user.name, user.email, user.role) == (user_id, name, email, role)
        assert "password" not in json.loads(storage.items[KEY])
        assert session_store.user == user
        assert stored_user(storage) == user

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [
            ("jane@example.com", "wrong"),
            ("admin@example.com", "password"),
            ("ghost@example.com", "password"),
            ("", ""),
        ],
    )
    async def test_invalid_pairs_leave_state_untouched(
        self, jane_session, storage, notifier, email, password
    ):
        before = jane_session.user

        with pytest.raises(InvalidCredentials):
            await jane_session.login(email, password)

        assert jane_session.user == before
        assert stored_user(storage) == before
        assert [(n.kind, n.message) for n in notifier.drain()] == [
            (NotificationKind.ERROR, "Invalid email or password"),
        ]

    @pytest.mark.asyncio
    async def test_loading_flag_is_asserted_during_latency(self, storage, notifier, credentials):
        store = SessionStore(storage, notifier, credentials, latency=0.05)
        await store.restore()

        task = asyncio.create_task(store.login("john@example.com", "password"))
        await asyncio.sleep(0.01)
        assert store.is_loading is True

        await task
        assert store.is_loading is False

    @pytest.mark.asyncio
    async def test_loading_flag_cleared_after_failure(self, session_store):
        with pytest.raises(InvalidCredentials):
            await session_store.login("john@example.com", "nope")
        assert session_store.is_loading is False

    @pytest.mark.asyncio
    async def test_success_notification(self, session_store, notifier):
        await session_store.login("john@example.com", "password")
        assert notifier.drain()[-1].message == "Logged in successfully"


class TestSignup:
    """Signup with email and password."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", [a[2] for a in DEFAULT_ACCOUNTS])
    async def test_known_email_is_rejected(self, jane_session, storage, email):
        before = jane_session.user

        with pytest.raises(DuplicateEmail):
            await jane_session.signup("Someone", email, "password")

        assert jane_session.user == before
        assert stored_user(storage) == before

    @pytest.mark.asyncio
    async def test_new_user_is_created_and_persisted(self, session_store, storage, notifier):
        user = await session_store.signup("Ada Lovelace", "ada+blog@example.com", "engines")

        assert user.id == "4"
        assert user.role == UserRole.USER
        assert user.avatar == "https://i.pravatar.cc/150?u=ada%2Bblog%40example.com"
        assert session_store.user == user
        assert stored_user(storage) == user
        assert notifier.drain()[-1].message == "Account created successfully"

    @pytest.mark.asyncio
    async def test_new_account_joins_known_set(self, session_store):
        await session_store.signup("Ada", "ada@example.com", "engines")
        await session_store.logout()

        with pytest.raises(DuplicateEmail):
            await session_store.signup("Ada Again", "ada@example.com", "engines")
        user = await session_store.login("ada@example.com", "engines")
        assert user.name == "Ada"


class TestLogout:
    """Logout clears memory and storage."""

    @pytest.mark.asyncio
    async def test_logout_clears_storage(self, jane_session, storage):
        await jane_session.logout()

        assert jane_session.user is None
        assert await storage.get_item(KEY) is None

    @pytest.mark.asyncio
    async def test_logout_is_idempotent(self, session_store, storage):
        await session_store.logout()
        await session_store.logout()

        assert session_store.user is None
        assert await storage.get_item(KEY) is None


class TestUpdateUser:
    """Profile patches."""

    @pytest.mark.asyncio
    async def test_patch_overwrites_only_given_fields(self, jane_session, storage):
        before = jane_session.user

        updated = await jane_session.update_user(UserUpdate(bio="Writes about AI", name="Jane S."))

        expected = before.model_copy(update={"bio": "Writes about AI", "name": "Jane S."})
        assert updated == expected
        assert jane_session.user == expected
        assert stored_user(storage) == expected

    @pytest.mark.asyncio
    async def test_mapping_patch_cannot_change_identity(self, jane_session):
        updated = await jane_session.update_user({"avatar": "https://img/x.png", "id": "99", "role": "admin"})

        assert updated.avatar == "https://img/x.png"
        assert updated.id == "2"
        assert updated.role == UserRole.AUTHOR

    @pytest.mark.asyncio
    async def test_null_name_keeps_record_restorable(self, jane_session, storage, notifier, credentials):
        updated = await jane_session.update_user({"name": None, "bio": None})

        assert updated.name == "Jane Smith"
        assert updated.bio is None
        restored = await SessionStore(storage, notifier, credentials, latency=0).restore()
        assert restored == updated
        assert KEY in storage.items

    @pytest.mark.asyncio
    async def test_patched_record_survives_restart(self, jane_session, storage, notifier, credentials):
        updated = await jane_session.update_user(UserUpdate(name="Jane S.", bio="Editor"))

        restored = await SessionStore(storage, notifier, credentials, latency=0).restore()

        assert restored == updated

    @pytest.mark.asyncio
    async def test_without_session_is_a_silent_no_op(self, session_store, storage, notifier):
        assert await session_store.update_user(UserUpdate(name="Nobody")) is None
        assert session_store.user is None
        assert storage.items == {}
        assert notifier.drain() == []


class TestProviderSignup:
    """Signup through the external authorization window."""

    @pytest.mark.asyncio
    async def test_google_timer_wins(self, session_store, window_opener, storage, notifier):
        user = await session_store.signup_with_google()

        assert user.name == "Google User"
        assert user.email == f"user_{user.id}@google.com"
        assert user.role == UserRole.USER
        assert user.avatar == f"https://i.pravatar.cc/150?u=google_{user.id}"
        assert stored_user(storage) == user

        window, features = window_opener.opened[0]
        assert window.closed is True
        assert window.name == "GoogleAuthPopup"
        assert window.url.startswith("https://accounts.google.com/o/oauth2/v2/auth?")
        assert "scope=profile%20email" in window.url
        assert "response_type=token" in window.url
        assert (features.width, features.height) == (600, 700)
        assert notifier.drain()[-1].message == "Signed up with Google successfully"
        assert session_store.auth_in_progress is False

    @pytest.mark.asyncio
    async def test_github_window_closed_first(self, storage, notifier, credentials):
        opener = FakeWindowOpener()
        store = SessionStore(storage, notifier, credentials, opener, latency=0, oauth_timeout=5)
        await store.restore()

        task = asyncio.create_task(store.signup_with_github())
        while not opener.opened:
            await asyncio.sleep(0)
        window, _ = opener.opened[0]
        assert "github.com/login/oauth/authorize" in window.url
        assert "scope=user%3Aemail" in window.url

        window.close()
        with pytest.raises(AuthCancelled):
            await asyncio.wait_for(task, timeout=1)

        assert store.user is None
        assert storage.items == {}
        assert store.is_loading is False
        assert notifier.drain()[-1].message == "Failed to sign up with GitHub"

    @pytest.mark.asyncio
    async def test_cancel_external_auth(self, storage, notifier, credentials):
        opener = FakeWindowOpener()
        store = SessionStore(storage, notifier, credentials, opener, latency=0, oauth_timeout=5)
        await store.restore()
        assert store.cancel_external_auth() is False

        task = asyncio.create_task(store.signup_with_google())
        while not opener.opened:
            await asyncio.sleep(0)
        assert store.auth_in_progress is True
        assert store.cancel_external_auth() is True

        with pytest.raises(AuthCancelled):
            await asyncio.wait_for(task, timeout=1)
        assert store.auth_in_progress is False

    @pytest.mark.asyncio
    async def test_blocked_popup(self, storage, notifier, credentials):
        store = SessionStore(
            storage, notifier, credentials, FakeWindowOpener(blocked=True), latency=0
        )
        await store.restore()

        with pytest.raises(AuthCancelled, match="blocked"):
            await store.signup_with_google()
        assert store.user is None
        assert notifier.drain()[-1].kind == NotificationKind.ERROR
