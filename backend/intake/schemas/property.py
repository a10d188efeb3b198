"""Pydantic schemas for property listings and CSV import."""
from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class PropertyBase(BaseModel):
    """Fields an admin can set on a property."""
    region: str = ""
    district: str = ""
    subdistrict: str = ""
    owner_name: str = ""
    phone: str = ""
    assignee_id: Optional[str] = None
    assignee_name: str = ""
    status: Optional[str] = None
    note: str = ""


class PropertyCreate(PropertyBase):
    """Admin property creation schema."""
    address: str = Field(min_length=1)
    source: str = "general"
    price: int = 0


class PropertyUpdate(BaseModel):
    """Partial property update; unset fields are left alone."""
    address: Optional[str] = None
    price: Optional[int] = None
    region: Optional[str] = None
    district: Optional[str] = None
    subdistrict: Optional[str] = None
    owner_name: Optional[str] = None
    phone: Optional[str] = None
    assignee_id: Optional[str] = None
    assignee_name: Optional[str] = None
    status: Optional[str] = None
    note: Optional[str] = None


class PropertyResponse(BaseModel):
    """Property response schema."""
    id: str
    source: str
    address: str
    normalized_address: str
    price: int
    region: str
    district: str
    subdistrict: str
    owner_name: str
    phone: str
    assignee_id: Optional[str] = None
    assignee_name: str
    status: str
    note: str
    created_by_type: str
    created_by_name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PropertyListResponse(BaseModel):
    """List response wrapper for properties."""
    items: List[PropertyResponse]
    total: int


class PropertyViewResponse(BaseModel):
    """Role-aware listing view with per-source counts."""
    role_view: str
    counts: Dict[str, int]
    items: List[PropertyResponse]


# --- Public registration ---
class PublicListingRequest(BaseModel):
    """Public "register my property" form."""
    address: str = ""
    price: int = 0
    registrant_name: str = ""
    phone: str = ""
    region: str = ""
    district: str = ""
    subdistrict: str = ""
    note: str = ""


class PublicListingResponse(BaseModel):
    """What the public form gets back; no contact data echoed."""
    message: str
    id: str
    source: str
    status: str
    address: str
    created_at: datetime


# --- CSV import ---
class CsvImportRequest(BaseModel):
    """Property CSV upload."""
    csv_text: str
    source: Optional[str] = None


class CsvImportResponse(BaseModel):
    """Outcome of a CSV upload."""
    inserted: int
    duplicates: int
    duplicate_addresses: List[str]
    errors: int
    total_properties: int


class CsvSchemaResponse(BaseModel):
    """Expected CSV columns and an example file."""
    sample_csv_schema: List[str]
    example_csv: str
    note: Optional[str] = None
