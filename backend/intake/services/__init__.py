"""Services exports."""
from intake.services.address import (
    extract_district_and_subdistrict,
    normalize_address,
    region_key,
)
from intake.services.grouping import (
    AssignmentGroup,
    GroupingError,
    InvalidArgument,
    NoData,
    StaffIdentity,
    build_auto_groups,
    build_region_buckets,
    uncovered_districts,
)
from intake.services.regions import SEOUL_RING, DistrictPrecedence, Granularity, RegionBucket

__all__ = [
    "normalize_address",
    "extract_district_and_subdistrict",
    "region_key",
    "AssignmentGroup",
    "GroupingError",
    "InvalidArgument",
    "NoData",
    "StaffIdentity",
    "build_auto_groups",
    "build_region_buckets",
    "uncovered_districts",
    "DistrictPrecedence",
    "Granularity",
    "RegionBucket",
    "SEOUL_RING",
]
