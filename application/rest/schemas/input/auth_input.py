"""Auth input schemas for API requests."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Schema for password login.

    Attributes:
        email (str): Account email.
        password (str): Account password.
    """

    email: str
    password: str
