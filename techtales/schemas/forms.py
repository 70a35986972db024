"""
Form schemas for the signup and profile pages.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


class SignupForm(BaseModel):
    """Email/password signup form."""
    
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    confirm_password: str
    accept_terms: bool = False
    
    @model_validator(mode="after")
    def check_form(self) -> "SignupForm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if not self.accept_terms:
            raise ValueError("You must accept the terms and conditions")
        return self


class ProfileUpdate(BaseModel):
    """Profile settings form."""
    
    name: str = Field(..., min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    avatar: Optional[str] = None
    
    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class PasswordChange(BaseModel):
    """Password change form."""
    
    current_password: str
    new_password: str
    confirm_password: str
    
    @model_validator(mode="after")
    def check_passwords(self) -> "PasswordChange":
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        if len(self.new_password) < 8:
            raise ValueError("Password must be at least 8 characters")
        return self
