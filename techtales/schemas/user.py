"""
User identity schemas.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Role of a site user."""
    ADMIN = "admin"
    AUTHOR = "author"
    USER = "user"


class User(BaseModel):
    """Authenticated identity as shown in the UI and persisted in local storage."""
    
    id: str = Field(..., min_length=1)
    name: str
    email: str
    role: UserRole = UserRole.USER
    avatar: Optional[str] = None
    bio: Optional[str] = None
    
    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """Patch for the mutable profile fields (name, avatar, bio). Unset fields are kept."""
    
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    avatar: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=500)


class UserLogin(BaseModel):
    """Login request."""
    
    email: str
    password: str
