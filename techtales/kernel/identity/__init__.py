"""
Identity: mock credentials, durable session storage and the session store.
"""

from techtales.kernel.identity.password import PasswordHasher, hash_password, verify_password
from techtales.kernel.identity.credentials import CredentialSet, avatar_for
from techtales.kernel.identity.storage import (
    DatabaseSessionStorage,
    MemorySessionStorage,
    SessionStorage,
)
from techtales.kernel.identity.oauth import (
    AuthWindow,
    BrowserWindowOpener,
    ManagedAuthWindow,
    OAuthProvider,
    WindowFeatures,
    WindowOpener,
    get_provider,
    run_oauth_flow,
)
from techtales.kernel.identity.session_store import SessionStore

__all__ = [
    "PasswordHasher",
    "hash_password",
    "verify_password",
    "CredentialSet",
    "avatar_for",
    "DatabaseSessionStorage",
    "MemorySessionStorage",
    "SessionStorage",
    "AuthWindow",
    "BrowserWindowOpener",
    "ManagedAuthWindow",
    "OAuthProvider",
    "WindowFeatures",
    "WindowOpener",
    "get_provider",
    "run_oauth_flow",
    "SessionStore",
]
