"""Pydantic schemas for staff accounts and auth."""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class RegionRef(BaseModel):
    """A region on a staff member's assignment list."""
    unit: Literal["district", "subdistrict"]
    name: str = Field(min_length=1)

    class Config:
        from_attributes = True


# --- Auth Schemas ---
class TokenResponse(BaseModel):
    """Token response schema."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token expiration in seconds")
    user: Optional["StaffResponse"] = None


class TokenRefreshRequest(BaseModel):
    """Refresh token request schema."""
    refresh_token: str


class LoginRequest(BaseModel):
    """Login request schema."""
    name: str
    password: str


# --- Staff Schemas ---
class StaffBase(BaseModel):
    """Base staff schema."""
    name: str = Field(min_length=1, max_length=100)
    role: str = "agent"


class StaffCreate(StaffBase):
    """Staff creation schema."""
    password: str = Field(min_length=1)
    regions: List[RegionRef] = Field(default_factory=list)


class StaffUpdate(BaseModel):
    """Staff update schema."""
    name: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    is_active: Optional[bool] = None
    regions: Optional[List[RegionRef]] = None


class StaffResponse(StaffBase):
    """Staff response schema."""
    id: str
    regions: List[RegionRef] = Field(default_factory=list)
    is_active: bool = True
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class StaffListResponse(BaseModel):
    """List response wrapper for staff accounts."""
    items: List[StaffResponse]
    total: int


TokenResponse.model_rebuild()
