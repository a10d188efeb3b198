"""Realtor office registry API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from intake.auth.jwt import get_current_active_admin
from intake.models import RealtorOffice, StaffAccount
from intake.schemas.office import (
    OfficeCreate,
    OfficeListResponse,
    OfficePhoneUpdate,
    OfficeResponse,
    OfficeUpdate,
)
from intake.services.address import collapse_whitespace, normalize_address, normalize_phone
from intake.store import InMemoryStore, get_store

router = APIRouter(prefix="/admin/realtor-offices", tags=["Realtor Offices"])

PHONE_FIELDS = {"office_phone", "mobile_phone"}
DUPLICATE_OFFICE_DETAIL = "동일 중개사무소(상호+주소)가 이미 존재합니다."


def _get_office_or_404(office_id: str, store: InMemoryStore) -> RealtorOffice:
    office = store.get_office(office_id)
    if not office:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="중개사무소를 찾을 수 없습니다.",
        )
    return office


@router.get("", response_model=OfficeListResponse)
async def list_offices(
    q: Optional[str] = Query(None),
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    items = list(store.realtor_offices)
    if q and q.strip():
        needle = q.strip().lower()
        items = [
            o for o in items
            if any(needle in v.lower() for v in (o.office_name, o.address, o.district, o.manager_name) if v)
        ]
    return OfficeListResponse(items=[OfficeResponse.model_validate(o) for o in items], total=len(items))


@router.post("", response_model=OfficeResponse, status_code=status.HTTP_201_CREATED)
async def create_office(
    data: OfficeCreate,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    office_name = data.office_name.strip()
    address = collapse_whitespace(data.address)
    if not office_name or not address:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="office_name, address는 필수입니다.",
        )

    office = RealtorOffice(
        office_name=office_name,
        address=address,
        normalized_address=normalize_address(address),
        region=data.region.strip(),
        district=data.district.strip(),
        manager_name=data.manager_name.strip(),
        office_phone=normalize_phone(data.office_phone),
        mobile_phone=normalize_phone(data.mobile_phone),
        note=data.note.strip(),
    )
    if store.office_exists(office.office_name, office.normalized_address):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DUPLICATE_OFFICE_DETAIL,
        )
    return OfficeResponse.model_validate(store.add_office(office))


@router.patch("/{office_id}", response_model=OfficeResponse)
async def update_office(
    office_id: str,
    data: OfficeUpdate,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    office = _get_office_or_404(office_id, store)
    updates = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    if "address" in updates:
        updates["address"] = collapse_whitespace(updates["address"])
    office_name = updates.get("office_name", office.office_name).strip()
    address = updates.get("address", office.address)
    if not office_name or not address:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="office_name, address는 비울 수 없습니다.",
        )
    if store.office_exists(office_name, normalize_address(address), exclude_id=office.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=DUPLICATE_OFFICE_DETAIL,
        )

    office.normalized_address = normalize_address(address)
    for field, value in updates.items():
        setattr(office, field, normalize_phone(value) if field in PHONE_FIELDS else value.strip())
    office.touch()
    return OfficeResponse.model_validate(office)


@router.patch("/{office_id}/phone", response_model=OfficeResponse)
async def update_office_phone(
    office_id: str,
    data: OfficePhoneUpdate,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Quick phone-number edit from the office list."""
    office = _get_office_or_404(office_id, store)
    if data.office_phone is not None:
        office.office_phone = normalize_phone(data.office_phone)
    if data.mobile_phone is not None:
        office.mobile_phone = normalize_phone(data.mobile_phone)
    office.touch()
    return OfficeResponse.model_validate(office)
