"""Region assignment API endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from intake.auth.jwt import get_current_active_admin
from intake.models import RegionAssignment, StaffAccount
from intake.schemas.assignment import (
    ApplyAssignmentsRequest,
    ApplyAssignmentsResponse,
    AssignmentGroupResponse,
    AutoGroupRequest,
    AutoGroupResponse,
    RegionBucketResponse,
    RegionOverviewResponse,
    StaffAssignment,
)
from intake.services.grouping import (
    InvalidArgument,
    NoData,
    build_auto_groups,
    build_region_buckets,
    pad_with_staff,
    uncovered_districts,
)
from intake.services.regions import Granularity
from intake.store import InMemoryStore, get_store
from intake.utils.audit import log_audit_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/region-assignments", tags=["Region Assignments"])


def _current_assignments(store: InMemoryStore) -> list[StaffAssignment]:
    return [StaffAssignment.model_validate(u) for u in store.agents()]


@router.get("", response_model=RegionOverviewResponse)
async def get_region_overview(
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Region buckets derived from current properties and each agent's regions."""
    buckets = build_region_buckets(store.properties)
    return RegionOverviewResponse(
        agent_count=len(store.agents()),
        districts=[RegionBucketResponse.model_validate(b) for b in buckets[Granularity.DISTRICT]],
        subdistricts=[RegionBucketResponse.model_validate(b) for b in buckets[Granularity.SUBDISTRICT]],
        current_assignments=_current_assignments(store),
    )


@router.post("/auto-groups", response_model=AutoGroupResponse)
async def suggest_groups(
    request: AutoGroupRequest,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Build an unapplied grouping draft.

    Nothing is written here; the admin reviews the draft and saves it through
    ``POST /admin/region-assignments``.
    """
    if request.regions is None:
        buckets = build_region_buckets(store.properties)[request.granularity]
        selected = [b.key for b in buckets]
    else:
        selected = request.regions

    staff = store.staff_identities()
    try:
        groups = build_auto_groups(
            staff_count=request.staff_count,
            granularity=request.granularity,
            selected_regions=selected,
            properties=store.properties,
            staff=staff,
        )
    except InvalidArgument as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NoData as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    granularity = groups[0].unit
    escalated = granularity is not request.granularity
    dropped = uncovered_districts(selected, groups) if escalated else []
    total_regions = sum(len(g.regions) for g in groups)
    groups = pad_with_staff(groups, staff)

    logger.info(
        "Auto-grouping draft: %d regions in %d groups (%s)",
        total_regions, len(groups), granularity.value,
    )

    return AutoGroupResponse(
        granularity=granularity,
        unit_label=granularity.label,
        escalated=escalated,
        total_regions=total_regions,
        dropped_regions=dropped,
        groups=[AssignmentGroupResponse.model_validate(g) for g in groups],
    )


@router.post("", response_model=ApplyAssignmentsResponse)
async def apply_assignments(
    request: ApplyAssignmentsRequest,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Overwrite each listed agent's region list.

    Agents are updated one after another; ids that do not belong to an agent
    are reported back as skipped.
    """
    updated = []
    skipped = []
    for item in request.assignments:
        user = store.get_staff(item.staff_id)
        if not user or not user.is_agent:
            skipped.append(item.staff_id)
            continue
        user.regions = [RegionAssignment(unit=r.unit, name=r.name) for r in item.regions]
        user.touch()
        updated.append(user.id)

        log_audit_event(
            "regions_assigned",
            actor=current_user,
            details={
                "target_staff_id": user.id,
                "regions": [f"{r.unit}:{r.name}" for r in user.regions],
            },
        )

    return ApplyAssignmentsResponse(
        updated=updated,
        skipped=skipped,
        items=_current_assignments(store),
    )
