"""Public property registration endpoints (no login)."""
from fastapi import APIRouter, Depends, HTTPException, status

from intake.models import Property
from intake.schemas.property import PublicListingRequest, PublicListingResponse
from intake.services.address import (
    collapse_whitespace,
    extract_district_and_subdistrict,
    normalize_address,
    normalize_phone,
)
from intake.store import InMemoryStore, get_store
from intake.utils.audit import log_audit_event

router = APIRouter(prefix="/public-listings", tags=["Public"])

REQUIRED_FIELDS = ["address", "price", "registrant_name", "phone"]


@router.get("")
async def describe_public_listing():
    """Tell the form which fields are required."""
    return {"message": "일반물건 등록 API", "required_fields": REQUIRED_FIELDS}


@router.post("", response_model=PublicListingResponse, status_code=status.HTTP_201_CREATED)
async def register_public_listing(
    request: PublicListingRequest,
    store: InMemoryStore = Depends(get_store),
):
    """Register a "general" listing from the public form; it starts in review."""
    address = collapse_whitespace(request.address)
    registrant_name = request.registrant_name.strip()
    phone = normalize_phone(request.phone)

    if not address or not request.price or not registrant_name or not phone:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="필수값(address, price, registrant_name, phone)을 입력하세요.",
        )

    normalized = normalize_address(address)
    if store.address_exists(normalized):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="동일 주소 물건이 이미 등록되어 있습니다.",
        )

    district, subdistrict = extract_district_and_subdistrict(address)
    prop = store.add_property(
        Property(
            source="general",
            address=address,
            normalized_address=normalized,
            price=request.price,
            region=request.region.strip(),
            district=request.district.strip() or district,
            subdistrict=request.subdistrict.strip() or subdistrict,
            owner_name=registrant_name,
            phone=phone,
            status="review",
            note=request.note.strip() or "프론트 일반물건 등록",
            created_by_type="public",
            created_by_name=registrant_name,
        )
    )

    log_audit_event(
        "public_listing_registered",
        details={"property_id": prop.id, "district": prop.district},
    )

    return PublicListingResponse(
        message="검토후 연락드리겠습니다.",
        id=prop.id,
        source=prop.source,
        status=prop.status,
        address=prop.address,
        created_at=prop.created_at,
    )
