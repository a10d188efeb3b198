"""Staff account management API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from intake.auth.jwt import get_current_active_admin, hash_password
from intake.models import ROLE_ADMIN, ROLE_AGENT, RegionAssignment, StaffAccount
from intake.schemas.user import (
    StaffCreate,
    StaffListResponse,
    StaffResponse,
    StaffUpdate,
)
from intake.store import InMemoryStore, get_store
from intake.utils.audit import log_audit_event

router = APIRouter(prefix="/admin/staff", tags=["Staff"])

ALLOWED_STAFF_ROLES = {ROLE_ADMIN, ROLE_AGENT}
ROLE_ALIASES = {
    "admin": ROLE_ADMIN,
    "관리자": ROLE_ADMIN,
    "agent": ROLE_AGENT,
    "staff": ROLE_AGENT,
    "담당자": ROLE_AGENT,
}


def _normalize_role(role: Optional[str]) -> str:
    if role is None:
        return ROLE_AGENT

    canonical_role = ROLE_ALIASES.get(role.strip().lower())

    if canonical_role is None or canonical_role not in ALLOWED_STAFF_ROLES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid role. Allowed values: admin, agent, staff",
        )

    return canonical_role


def _get_staff_or_404(staff_id: str, store: InMemoryStore) -> StaffAccount:
    user = store.get_staff(staff_id)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="계정을 찾을 수 없습니다.",
        )

    return user


def _ensure_unique_name(name: str, store: InMemoryStore, exclude_id: Optional[str] = None) -> None:
    existing = store.get_staff_by_name(name)
    if existing and existing.id != exclude_id:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="동일 이름 계정이 이미 존재합니다.",
        )


@router.get("", response_model=StaffListResponse)
async def list_staff(
    role: Optional[str] = Query(None, description="Filter by role"),
    include_inactive: bool = False,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """List staff accounts in creation order."""
    users = list(store.staff)

    if role is not None:
        wanted = _normalize_role(role)
        users = [u for u in users if u.role == wanted]

    if not include_inactive:
        users = [u for u in users if u.is_active]

    items = [StaffResponse.model_validate(u) for u in users]
    return StaffListResponse(items=items, total=len(items))


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def create_staff(
    data: StaffCreate,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Create an admin or agent account."""
    name = data.name.strip()
    password = data.password.strip()
    if not name or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="name, password는 필수입니다.",
        )
    _ensure_unique_name(name, store)

    user = StaffAccount(
        name=name,
        password_hash=hash_password(password),
        role=_normalize_role(data.role),
        regions=[RegionAssignment(unit=r.unit, name=r.name) for r in data.regions],
    )
    store.staff.append(user)

    log_audit_event(
        "staff_created",
        actor=current_user,
        details={
            "target_staff_id": user.id,
            "target_name": user.name,
            "target_role": user.role,
        },
    )

    return StaffResponse.model_validate(user)


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff(
    staff_id: str,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Get a staff account by id."""
    return StaffResponse.model_validate(_get_staff_or_404(staff_id, store))


@router.patch("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    staff_id: str,
    data: StaffUpdate,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Update name, password, role, active flag or region list."""
    user = _get_staff_or_404(staff_id, store)
    updates = data.model_dump(exclude_unset=True)
    previous_role = user.role

    if updates.get("name") is not None:
        name = updates["name"].strip()
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="name은 비울 수 없습니다.",
            )
        _ensure_unique_name(name, store, exclude_id=user.id)
        user.name = name

    if updates.get("password") is not None:
        user.password_hash = hash_password(updates["password"].strip())

    if updates.get("role") is not None:
        new_role = _normalize_role(updates["role"])
        if user.role == ROLE_ADMIN and new_role != ROLE_ADMIN and store.admin_count() <= 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="마지막 관리자 계정의 권한은 변경할 수 없습니다.",
            )
        user.role = new_role

    if updates.get("is_active") is not None:
        user.is_active = updates["is_active"]

    if data.regions is not None:
        user.regions = [RegionAssignment(unit=r.unit, name=r.name) for r in data.regions]

    user.touch()

    change_details = {
        "target_staff_id": user.id,
        "updated_fields": sorted(k for k in updates.keys() if k != "password"),
    }
    if "password" in updates:
        change_details["password_changed"] = True
    if user.role != previous_role:
        change_details["previous_role"] = previous_role
        change_details["new_role"] = user.role

    log_audit_event("staff_updated", actor=current_user, details=change_details)

    return StaffResponse.model_validate(user)


@router.delete("/{staff_id}")
async def delete_staff(
    staff_id: str,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Delete a staff account. The last admin cannot be removed."""
    user = _get_staff_or_404(staff_id, store)

    if user.role == ROLE_ADMIN and store.admin_count() <= 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="마지막 관리자 계정은 삭제할 수 없습니다.",
        )

    store.staff.remove(user)

    log_audit_event(
        "staff_deleted",
        actor=current_user,
        details={"target_staff_id": user.id, "target_name": user.name},
    )

    return {"removed_id": user.id}
