"""Authentication API endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status

from intake.auth.jwt import (
    create_access_token,
    create_refresh_token,
    get_current_user,
    verify_password,
    verify_token,
)
from intake.config import get_settings
from intake.models import StaffAccount, utcnow
from intake.schemas.user import (
    LoginRequest,
    StaffResponse,
    TokenRefreshRequest,
    TokenResponse,
)
from intake.store import InMemoryStore, get_store
from intake.utils.audit import log_audit_event

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _issue_tokens(user: StaffAccount) -> TokenResponse:
    settings = get_settings()
    return TokenResponse(
        access_token=create_access_token(user.id, user.role),
        refresh_token=create_refresh_token(user.id),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_HOURS * 3600,
        user=StaffResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    store: InMemoryStore = Depends(get_store),
):
    """Login with account name and password."""
    user = store.get_staff_by_name(request.name.strip())

    if not user or not verify_password(request.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="이름 또는 비밀번호가 올바르지 않습니다.",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )

    user.last_login = utcnow()
    log_audit_event("login", actor=user)
    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    request: TokenRefreshRequest,
    store: InMemoryStore = Depends(get_store),
):
    """Refresh access token using refresh token."""
    payload = verify_token(request.refresh_token, "refresh")
    user = store.get_staff(payload.get("sub") or "")

    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token",
        )

    return _issue_tokens(user)


@router.get("/me", response_model=StaffResponse)
async def get_current_user_info(
    current_user: StaffAccount = Depends(get_current_user),
):
    """Get current authenticated user info."""
    return StaffResponse.model_validate(current_user)


@router.post("/logout")
async def logout(
    current_user: StaffAccount = Depends(get_current_user),
):
    """Logout (client should discard tokens)."""
    return {"message": "Successfully logged out"}
