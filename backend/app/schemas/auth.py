"""
Auth Pydantic schemas - shared admin password login and identity responses
"""
from pydantic import BaseModel


class AdminLogin(BaseModel):
    """Schema for admin login"""
    password: str


class TokenResponse(BaseModel):
    """Schema for token response"""
    role: str
    token: str
    token_type: str = "bearer"


class IdentityResponse(BaseModel):
    """Schema for the authenticated principal"""
    role: str
    id: str
    email: str | None = None
