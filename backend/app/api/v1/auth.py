"""
Authentication endpoints - shared admin password login and identity lookups
"""
from fastapi import APIRouter, Depends, HTTPException, status

from backend.app.core.config import ADMIN_ROLE
from backend.app.core.dependencies import get_current_admin, get_current_reader
from backend.app.core.logging_config import get_logger
from backend.app.core.security import create_admin_token, verify_admin_password
from backend.app.schemas.auth import AdminLogin, IdentityResponse, TokenResponse

logger = get_logger("api.auth")
router = APIRouter()


@router.post("/admin/login", response_model=TokenResponse)
@router.post("/login", response_model=TokenResponse, include_in_schema=False)
def admin_login(login_data: AdminLogin):
    """
    Exchange the shared admin password for a session token

    - **password**: the admin password configured via ADMIN_PASSWORD
    """
    if not verify_admin_password(login_data.password):
        logger.warning("Admin login failed: invalid password")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin password.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    logger.info("Admin login successful")
    return TokenResponse(role=ADMIN_ROLE, token=create_admin_token())


@router.get("/admin/profile", response_model=IdentityResponse)
@router.get("/me", response_model=IdentityResponse, include_in_schema=False)
def admin_profile(admin: dict = Depends(get_current_admin)):
    """Return the admin principal"""
    return IdentityResponse(**admin)


@router.get("/member/me", response_model=IdentityResponse)
def member_profile(reader: dict = Depends(get_current_reader)):
    """Return the principal behind a member (or admin) token"""
    return IdentityResponse(**reader)
