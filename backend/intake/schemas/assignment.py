"""Pydantic schemas for region buckets, grouping drafts and assignments."""
from typing import List, Optional
from pydantic import BaseModel, Field

from intake.schemas.user import RegionRef
from intake.services.regions import Granularity


class RegionBucketResponse(BaseModel):
    key: str
    unit: Granularity
    count: int

    class Config:
        from_attributes = True


class StaffAssignment(BaseModel):
    """Current region list of one agent."""
    id: str
    name: str
    regions: List[RegionRef] = Field(default_factory=list)

    class Config:
        from_attributes = True


class RegionOverviewResponse(BaseModel):
    """Buckets to choose from plus what is assigned today."""
    agent_count: int
    districts: List[RegionBucketResponse]
    subdistricts: List[RegionBucketResponse]
    current_assignments: List[StaffAssignment]


class AutoGroupRequest(BaseModel):
    """Auto-grouping request.

    ``regions`` left out (None) means every district or sub-district that has
    properties; an explicit empty list is rejected.
    """
    staff_count: int
    granularity: Granularity = Granularity.DISTRICT
    regions: Optional[List[str]] = None


class AssignmentGroupResponse(BaseModel):
    index: int
    staff_id: Optional[str] = None
    staff_name: str
    unit: Granularity
    regions: List[str]

    class Config:
        from_attributes = True


class AutoGroupResponse(BaseModel):
    """Unapplied grouping draft."""
    granularity: Granularity
    unit_label: str
    escalated: bool
    total_regions: int
    dropped_regions: List[str] = Field(
        default_factory=list,
        description="Selected districts left out because they have no sub-district data",
    )
    groups: List[AssignmentGroupResponse]


class AssignmentItem(BaseModel):
    staff_id: str
    regions: List[RegionRef] = Field(default_factory=list)


class ApplyAssignmentsRequest(BaseModel):
    assignments: List[AssignmentItem]


class ApplyAssignmentsResponse(BaseModel):
    updated: List[str]
    skipped: List[str]
    items: List[StaffAssignment]
