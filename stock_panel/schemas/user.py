"""
Stock Panel - Pydantic Schemas
User and Authentication Schemas
"""
from pydantic import BaseModel, EmailStr, ConfigDict, field_validator
from pydantic.networks import validate_email


# =========================
# Login Schemas
# =========================

class LoginRequest(BaseModel):
    """Schema for user login."""
    username: str = ""
    password: str = ""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "longpass1"
            }
        }
    )


class LoginResponse(BaseModel):
    """Schema for token response."""
    token: str
    message: str


# =========================
# Registration Schemas
# =========================

class RegisterRequest(BaseModel):
    """Schema for creating a new user. Lengths are checked by the auth service."""
    username: str = ""
    email: EmailStr
    password: str = ""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "email": "a@x.com",
                "password": "longpass1"
            }
        }
    )


# =========================
# Password Reset Schemas
# =========================

class ForgotPasswordRequest(BaseModel):
    """Schema for requesting a reset link."""
    email: str = ""

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        # Same normalization as EmailStr so lookups match stored addresses
        if not v:
            return v
        try:
            return validate_email(v)[1]
        except ValueError:
            return v


class ResetPasswordRequest(BaseModel):
    """Schema for consuming a reset token."""
    token: str = ""
    password: str = ""


class EmailCheckRequest(BaseModel):
    """Schema for sending a test email."""
    email: str = ""


# =========================
# Message Schemas
# =========================

class Message(BaseModel):
    """Generic message response schema."""
    message: str


class StatusMessage(BaseModel):
    """Message with an explicit success flag."""
    success: bool
    message: str


class ErrorResponse(BaseModel):
    """Error response schema."""
    detail: str
    code: str | None = None
