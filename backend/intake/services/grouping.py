"""Region auto-grouping: split regions into contiguous, balanced staff groups.

The engine is a pure function over in-memory inputs. It never writes to the
store; applying a draft to staff accounts is the caller's job.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, Sequence

from intake.services.address import collapse_whitespace, region_key
from intake.services.regions import (
    SEOUL_RING,
    DistrictPrecedence,
    Granularity,
    RegionBucket,
    sort_region_keys,
    split_subdistrict_key,
)

logger = logging.getLogger("intake.grouping")

UNASSIGNED_LABEL = "(unassigned)"


class GroupingError(Exception):
    """Base class for auto-grouping failures."""


class InvalidArgument(GroupingError, ValueError):
    """The grouping request itself is unusable."""


class NoData(GroupingError):
    """Escalation to sub-districts was needed but no sub-district data exists."""


class RegionSource(Protocol):
    district: str
    subdistrict: str


@dataclass(frozen=True)
class StaffIdentity:
    id: str
    name: str


@dataclass
class AssignmentGroup:
    """One draft group: a contiguous run of regions and its bound staff member."""

    index: int
    unit: Granularity
    regions: list[str] = field(default_factory=list)
    staff_id: Optional[str] = None
    staff_name: str = UNASSIGNED_LABEL


def build_region_buckets(
    properties: Iterable[RegionSource],
    precedence: DistrictPrecedence = SEOUL_RING,
) -> dict[Granularity, list[RegionBucket]]:
    """Count properties per district and per district + sub-district."""
    districts: Counter = Counter()
    subdistricts: Counter = Counter()

    for prop in properties:
        district = region_key(Granularity.DISTRICT, prop.district)
        if not district:
            continue
        districts[district] += 1
        if (prop.subdistrict or "").strip():
            subdistricts[region_key(Granularity.SUBDISTRICT, district, prop.subdistrict)] += 1

    return {
        Granularity.DISTRICT: [
            RegionBucket(key, Granularity.DISTRICT, districts[key])
            for key in sort_region_keys(districts, Granularity.DISTRICT, precedence)
        ],
        Granularity.SUBDISTRICT: [
            RegionBucket(key, Granularity.SUBDISTRICT, subdistricts[key])
            for key in sort_region_keys(subdistricts, Granularity.SUBDISTRICT, precedence)
        ],
    }


def subdistricts_within(
    properties: Iterable[RegionSource],
    districts: Iterable[str],
) -> set[str]:
    """Sub-district keys of every property whose district is in ``districts``."""
    wanted = {region_key(Granularity.DISTRICT, d) for d in districts}
    keys = set()
    for prop in properties:
        district = region_key(Granularity.DISTRICT, prop.district)
        if district not in wanted or not (prop.subdistrict or "").strip():
            continue
        keys.add(region_key(Granularity.SUBDISTRICT, district, prop.subdistrict))
    return keys


def partition_contiguous(items: Sequence[str], chunk_count: int) -> list[list[str]]:
    """Split ``items`` into ``chunk_count`` consecutive runs whose sizes differ by at most one."""
    if chunk_count < 1:
        raise InvalidArgument("chunk_count must be at least 1")
    base, remainder = divmod(len(items), chunk_count)
    chunks = []
    start = 0
    for i in range(chunk_count):
        size = base + 1 if i < remainder else base
        chunks.append(list(items[start:start + size]))
        start += size
    return chunks


def build_auto_groups(
    staff_count: int,
    granularity: Granularity,
    selected_regions: Iterable[str],
    properties: Iterable[RegionSource],
    staff: Sequence[StaffIdentity],
    precedence: DistrictPrecedence = SEOUL_RING,
) -> list[AssignmentGroup]:
    """Partition the selected regions into at most ``staff_count`` groups.

    When grouping by district and there are more staff than selected
    districts, the selection is replaced by the sub-districts found in those
    districts. Regions are ordered by ``precedence`` and dealt out in
    contiguous blocks; block ``i`` goes to ``staff[i]`` when there is one.

    Raises:
        InvalidArgument: staff_count < 1, no staff, or nothing selected.
        NoData: escalation needed but no sub-district data exists.
    """
    if staff_count is None or staff_count < 1:
        raise InvalidArgument("staff_count must be at least 1")
    if not staff:
        raise InvalidArgument("no staff accounts available for grouping")

    granularity = Granularity(granularity)
    regions = {collapse_whitespace(r) for r in selected_regions}
    regions.discard("")
    if not regions:
        raise InvalidArgument("no regions selected")

    if granularity is Granularity.DISTRICT and staff_count > len(regions):
        escalated = subdistricts_within(properties, regions)
        if not escalated:
            raise NoData("cannot subdivide — no sub-district information available")
        logger.info(
            "Escalating %d districts to %d sub-districts for %d staff",
            len(regions), len(escalated), staff_count,
        )
        covered = {split_subdistrict_key(key)[0] for key in escalated}
        if regions - covered:
            logger.warning("No sub-district data for %s", ", ".join(sorted(regions - covered)))
        granularity = Granularity.SUBDISTRICT
        regions = escalated

    ordered = sort_region_keys(regions, granularity, precedence)
    chunks = partition_contiguous(ordered, min(staff_count, len(ordered)))

    groups = []
    for index, chunk in enumerate(chunks):
        group = AssignmentGroup(index=index, unit=granularity, regions=chunk)
        if index < len(staff):
            group.staff_id = staff[index].id
            group.staff_name = staff[index].name
        groups.append(group)
    return groups


def pad_with_staff(
    groups: list[AssignmentGroup],
    staff: Sequence[StaffIdentity],
) -> list[AssignmentGroup]:
    """Append an empty group for every staff member the engine left unbound."""
    bound = {g.staff_id for g in groups if g.staff_id}
    unit = groups[0].unit if groups else Granularity.DISTRICT
    padded = list(groups)
    for member in staff:
        if member.id in bound:
            continue
        padded.append(
            AssignmentGroup(
                index=len(padded),
                unit=unit,
                staff_id=member.id,
                staff_name=member.name,
            )
        )
    return padded



def uncovered_districts(
    selected_regions: Iterable[str],
    groups: Sequence[AssignmentGroup],
    precedence: DistrictPrecedence = SEOUL_RING,
) -> list[str]:
    """Selected districts that ended up in no group after escalation.

    Only district-level selections can go missing: a district without any
    sub-district data has nothing to contribute once grouping switches to
    sub-districts.
    """
    covered = {split_subdistrict_key(region)[0] for g in groups for region in g.regions}
    selected = {collapse_whitespace(r) for r in selected_regions}
    selected.discard("")
    missing = {split_subdistrict_key(r)[0] for r in selected} - covered
    return sort_region_keys(missing, Granularity.DISTRICT, precedence)
