"""Pydantic schemas for the realtor office registry."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class OfficeCreate(BaseModel):
    office_name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    region: str = ""
    district: str = ""
    manager_name: str = ""
    office_phone: str = ""
    mobile_phone: str = ""
    note: str = ""


class OfficeUpdate(BaseModel):
    office_name: Optional[str] = None
    address: Optional[str] = None
    region: Optional[str] = None
    district: Optional[str] = None
    manager_name: Optional[str] = None
    office_phone: Optional[str] = None
    mobile_phone: Optional[str] = None
    note: Optional[str] = None


class OfficePhoneUpdate(BaseModel):
    office_phone: Optional[str] = None
    mobile_phone: Optional[str] = None


class OfficeResponse(BaseModel):
    id: str
    office_name: str
    address: str
    normalized_address: str
    region: str
    district: str
    manager_name: str
    office_phone: str
    mobile_phone: str
    note: str
    office_reg_no: str = ""
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OfficeListResponse(BaseModel):
    items: List[OfficeResponse]
    total: int


class OfficeCsvImportRequest(BaseModel):
    """Realtor office CSV upload (own columns or the public-data layout)."""
    csv_text: str


class OfficeCsvImportResponse(BaseModel):
    """Outcome of a realtor office CSV upload."""
    grouped_offices: int
    inserted: int
    duplicates: int
    skipped: int
    total_offices: int
