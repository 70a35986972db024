"""
Password hashing for the mock credential set, using bcrypt.
"""

from typing import Optional

import bcrypt

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72
DEFAULT_ROUNDS = 12


class PasswordHasher:
    """Password hashing service."""
    
    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    
    @staticmethod
    def hash(password: str, rounds: Optional[int] = None) -> str:
        """
        Hash a password using bcrypt.
        
        Args:
            password: Plain text password
            rounds: bcrypt cost factor (4-31); defaults to DEFAULT_ROUNDS
            
        Returns:
            Hashed password string
        """
        salt = bcrypt.gensalt(rounds=rounds or DEFAULT_ROUNDS)
        return bcrypt.hashpw(PasswordHasher._encode(password), salt).decode("utf-8")
    
    @staticmethod
    def verify(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.
        
        Returns:
            True if password matches, False otherwise (including malformed hashes)
        """
        try:
            return bcrypt.checkpw(
                PasswordHasher._encode(plain_password),
                hashed_password.encode("utf-8"),
            )
        except ValueError:
            return False


# Convenience functions
def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password."""
    return PasswordHasher.hash(password, rounds)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password."""
    return PasswordHasher.verify(plain_password, hashed_password)
