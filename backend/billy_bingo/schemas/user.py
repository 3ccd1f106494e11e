# billy_bingo/schemas/user.py
"""
Pydantic schemas for user endpoints.
Fields are optional at the schema level; the rules (lengths, formats, required
fields) live in ``core.validation`` so every violation is reported together.
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict


class RegisterIn(BaseModel):
    """
    Request model for registration (and admin-style user creation).
    """
    name: Optional[str] = None  # 2-50 letters/digits, unique
    email: Optional[str] = None  # Unique, stored lowercased
    password: Optional[str] = None  # Plain text, hashed server-side


class LoginIn(BaseModel):
    """
    Request model for login by email.
    """
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdateIn(BaseModel):
    """
    Partial profile update. Unknown keys are ignored; ``password`` is validated
    but never applied through this path.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
