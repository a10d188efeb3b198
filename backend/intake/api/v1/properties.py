"""Property listing API endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from intake.auth.jwt import get_current_active_admin, get_optional_user
from intake.models import ROLE_AGENT, Property, StaffAccount
from intake.schemas.property import (
    PropertyCreate,
    PropertyListResponse,
    PropertyResponse,
    PropertyUpdate,
    PropertyViewResponse,
)
from intake.services.address import (
    PROPERTY_SOURCES,
    collapse_whitespace,
    extract_district_and_subdistrict,
    normalize_address,
    normalize_phone,
    normalize_status,
)
from intake.store import InMemoryStore, get_store
from intake.utils.audit import log_audit_event

router = APIRouter(tags=["Properties"])

DUPLICATE_ADDRESS_DETAIL = "동일 주소 물건이 이미 등록되어 있습니다."


def _get_property_or_404(property_id: str, store: InMemoryStore) -> Property:
    prop = store.get_property(property_id)
    if not prop:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="물건을 찾을 수 없습니다.",
        )
    return prop


def _matches_query(prop: Property, q: str) -> bool:
    fields = (
        prop.address,
        prop.region,
        prop.district,
        prop.subdistrict,
        prop.owner_name,
        prop.assignee_name,
        prop.note,
    )
    return any(q in value.lower() for value in fields if value)


def _filter_properties(
    items: List[Property],
    source: Optional[str],
    q: Optional[str],
    status_filter: Optional[str] = None,
) -> List[Property]:
    source = (source or "all").strip().lower()
    if source != "all":
        items = [p for p in items if p.source == source]
    if status_filter:
        wanted = status_filter.strip().lower()
        items = [p for p in items if p.status == wanted]
    if q and q.strip():
        needle = q.strip().lower()
        items = [p for p in items if _matches_query(p, needle)]
    return items


@router.get("/admin/properties", response_model=PropertyListResponse)
async def list_properties(
    source: Optional[str] = Query("all", description="auction, public, general or all"),
    q: Optional[str] = Query(None, description="Free-text search"),
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """List every property, newest first."""
    items = _filter_properties(list(store.properties), source, q)
    return PropertyListResponse(
        items=[PropertyResponse.model_validate(p) for p in items],
        total=len(items),
    )


@router.post("/admin/properties", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    data: PropertyCreate,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Register a property from the admin panel."""
    address = collapse_whitespace(data.address)
    source = data.source.strip().lower()
    if not address or source not in PROPERTY_SOURCES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="address, source 값이 올바르지 않습니다.",
        )

    normalized = normalize_address(address)
    if store.address_exists(normalized):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_ADDRESS_DETAIL)

    district, subdistrict = extract_district_and_subdistrict(address)
    prop = store.add_property(
        Property(
            source=source,
            address=address,
            normalized_address=normalized,
            price=data.price,
            region=data.region.strip(),
            district=data.district.strip() or district,
            subdistrict=data.subdistrict.strip() or subdistrict,
            owner_name=data.owner_name.strip(),
            phone=normalize_phone(data.phone),
            assignee_id=data.assignee_id or None,
            assignee_name=data.assignee_name.strip(),
            status=normalize_status(data.status),
            note=data.note.strip(),
            created_by_type="admin",
            created_by_name=current_user.name,
        )
    )

    log_audit_event(
        "property_created",
        actor=current_user,
        details={"property_id": prop.id, "address": prop.address, "source": prop.source},
    )
    return PropertyResponse.model_validate(prop)


@router.patch("/admin/properties/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: str,
    data: PropertyUpdate,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Update a property; an address change re-runs normalization and duplicate checks."""
    prop = _get_property_or_404(property_id, store)
    updates = data.model_dump(exclude_unset=True)

    new_address = collapse_whitespace(updates.get("address"))
    if new_address and normalize_address(new_address) != prop.normalized_address:
        normalized = normalize_address(new_address)
        if store.address_exists(normalized, exclude_id=prop.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_ADDRESS_DETAIL)
        prop.address = new_address
        prop.normalized_address = normalized
        district, subdistrict = extract_district_and_subdistrict(new_address)
        if not updates.get("district") and district:
            prop.district = district
        if not updates.get("subdistrict") and subdistrict:
            prop.subdistrict = subdistrict

    if updates.get("price") is not None:
        prop.price = updates["price"]
    for field in ("region", "district", "subdistrict", "owner_name", "note", "assignee_name"):
        if updates.get(field) is not None:
            setattr(prop, field, updates[field].strip())
    if updates.get("phone") is not None:
        prop.phone = normalize_phone(updates["phone"])
    if "assignee_id" in updates:
        prop.assignee_id = updates["assignee_id"] or None
    if updates.get("status") is not None:
        prop.status = normalize_status(updates["status"])
    prop.touch()

    log_audit_event(
        "property_updated",
        actor=current_user,
        details={"property_id": prop.id, "updated_fields": sorted(updates.keys())},
    )
    return PropertyResponse.model_validate(prop)


@router.delete("/admin/properties/{property_id}")
async def delete_property(
    property_id: str,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Delete a property."""
    prop = _get_property_or_404(property_id, store)
    store.remove_property(prop)
    log_audit_event(
        "property_deleted",
        actor=current_user,
        details={"property_id": prop.id, "address": prop.address},
    )
    return {"removed_id": prop.id}


@router.get("/properties", response_model=PropertyViewResponse)
async def view_properties(
    source: Optional[str] = Query("all"),
    status_filter: Optional[str] = Query(None, alias="status"),
    q: Optional[str] = Query(None),
    store: InMemoryStore = Depends(get_store),
    current_user: Optional[StaffAccount] = Depends(get_optional_user),
):
    """Listing view scoped by who is asking.

    Anonymous callers only see active listings, agents only see their own
    assigned listings, admins see everything.
    """
    items = list(store.properties)
    if current_user is None:
        items = [p for p in items if p.status == "active"]
    elif current_user.role == ROLE_AGENT:
        items = list(store.properties_assigned_to(current_user.id))

    items = _filter_properties(items, source, q, status_filter)

    counts = {"all": len(items)}
    for name in PROPERTY_SOURCES:
        counts[name] = sum(1 for p in items if p.source == name)

    return PropertyViewResponse(
        role_view=current_user.role if current_user else "public",
        counts=counts,
        items=[PropertyResponse.model_validate(p) for p in items],
    )
