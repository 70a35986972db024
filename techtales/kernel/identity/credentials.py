"""
Mock credential set standing in for a real identity provider.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple
from urllib.parse import quote

from techtales.kernel.identity.password import hash_password, verify_password
from techtales.schemas.user import User, UserRole

# (id, name, email, password, role)
DEFAULT_ACCOUNTS: Tuple[Tuple[str, str, str, str, UserRole], ...] = (
    ("1", "John Doe", "john@example.com", "password", UserRole.ADMIN),
    ("2", "Jane Smith", "jane@example.com", "password", UserRole.AUTHOR),
    ("3", "Admin User", "admin@example.com", "admin123", UserRole.ADMIN),
)


def avatar_for(seed: str) -> str:
    """Generated avatar URL for a seed string."""
    return f"https://i.pravatar.cc/150?u={quote(seed, safe='')}"


@dataclass
class Credential:
    """A known account: the public user record plus its password hash."""
    user: User
    password_hash: str


class CredentialSet:
    """
    Fixed, in-memory list of known accounts.

    Emails are matched exactly, as the login form submits them.
    """
    
    def __init__(
        self,
        accounts: Optional[Iterable[Tuple[str, str, str, str, UserRole]]] = None,
        rounds: Optional[int] = None,
    ):
        if rounds is None:
            from techtales.config import get_settings
            rounds = get_settings().password_hash_rounds
        self.rounds = rounds
        self._by_email: Dict[str, Credential] = {}
        for user_id, name, email, password, role in (accounts or DEFAULT_ACCOUNTS):
            self.add(
                User(
                    id=user_id,
                    name=name,
                    email=email,
                    role=role,
                    avatar=avatar_for(name.split()[0].lower()),
                ),
                password,
            )
    
    def add(self, user: User, password: str) -> None:
        """Register an account. Raises ValueError if the email is already known."""
        if user.email in self._by_email:
            raise ValueError(f"Email already registered: {user.email}")
        self._by_email[user.email] = Credential(
            user=user,
            password_hash=hash_password(password, self.rounds),
        )
    
    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return a copy of the matching user, or None."""
        credential = self._by_email.get(email)
        if credential is None or not verify_password(password, credential.password_hash):
            return None
        return credential.user.model_copy()
    
    def contains_email(self, email: str) -> bool:
        return email in self._by_email
    
    def __len__(self) -> int:
        return len(self._by_email)
    
    def change_password(self, email: str, current_password: str, new_password: str) -> bool:
        """Replace an account's password. Returns False if the current one is wrong."""
        credential = self._by_email.get(email)
        if credential is None or not verify_password(current_password, credential.password_hash):
            return False
        credential.password_hash = hash_password(new_password, self.rounds)
        return True
