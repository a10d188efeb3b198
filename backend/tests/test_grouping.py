from dataclasses import dataclass

import pytest

from intake.services.grouping import (
    UNASSIGNED_LABEL,
    InvalidArgument,
    NoData,
    StaffIdentity,
    build_auto_groups,
    build_region_buckets,
    pad_with_staff,
    partition_contiguous,
    uncovered_districts,
)
from intake.services.regions import (
    SEOUL_RING,
    DistrictPrecedence,
    Granularity,
    sort_region_keys,
)


@dataclass
class Record:
    district: str
    subdistrict: str = ""


def staff(n):
    return [StaffIdentity(id=f"user_{i}", name=f"담당자{i}") for i in range(n)]


PROPERTIES = [
    Record("강남구", "역삼동"),
    Record("강남구", "삼성동"),
    Record("강남구", "역삼동"),
    Record("서초구", "반포동"),
    Record("마포구", "합정동"),
    Record("마포구", "망원동"),
    Record("종로구", "청운동"),
]


def test_district_example_uses_precedence_order():
    groups = build_auto_groups(2, Granularity.DISTRICT, ["강남구", "서초구", "마포구"], PROPERTIES, staff(2))

    assert [g.regions for g in groups] == [["마포구", "서초구"], ["강남구"]]
    assert [g.staff_id for g in groups] == ["user_0", "user_1"]
    assert all(g.unit is Granularity.DISTRICT for g in groups)


def test_escalates_to_subdistricts_when_staff_outnumber_districts():
    groups = build_auto_groups(5, Granularity.DISTRICT, ["강남구", "서초구", "마포구"], PROPERTIES, staff(5))

    assert all(g.unit is Granularity.SUBDISTRICT for g in groups)
    assert [g.regions for g in groups] == [
        ["마포구 망원동"],
        ["마포구 합정동"],
        ["서초구 반포동"],
        ["강남구 삼성동"],
        ["강남구 역삼동"],
    ]


def test_escalated_regions_are_balanced():
    groups = build_auto_groups(4, Granularity.DISTRICT, ["강남구", "서초구", "마포구"], PROPERTIES, staff(4))

    assert [len(g.regions) for g in groups] == [2, 1, 1, 1]
    assert groups[0].regions == ["마포구 망원동", "마포구 합정동"]


def test_escalation_without_subdistrict_data_fails():
    records = [Record("강남구"), Record("서초구"), Record("서초구", "   ")]
    with pytest.raises(NoData):
        build_auto_groups(4, Granularity.DISTRICT, ["강남구", "서초구"], records, staff(4))


def test_no_escalation_when_already_subdistrict():
    groups = build_auto_groups(5, Granularity.SUBDISTRICT, ["강남구 역삼동", "서초구 반포동"], PROPERTIES, staff(5))

    assert [g.regions for g in groups] == [["서초구 반포동"], ["강남구 역삼동"]]


@pytest.mark.parametrize(
    "staff_count, available, regions, message",
    [
        (0, 1, ["강남구"], "staff_count"),
        (1, 0, ["강남구"], "no staff"),
        (1, 1, [], "no regions"),
        (1, 1, ["  "], "no regions"),
    ],
)
def test_invalid_arguments(staff_count, available, regions, message):
    with pytest.raises(InvalidArgument, match=message):
        build_auto_groups(staff_count, Granularity.DISTRICT, regions, PROPERTIES, staff(available))


def test_extra_groups_are_unassigned():
    districts = ["강남구", "서초구", "마포구", "종로구", "중구", "용산구"]
    groups = build_auto_groups(3, Granularity.DISTRICT, districts, PROPERTIES, staff(1))

    assert groups[0].staff_id == "user_0"
    assert [g.staff_id for g in groups[1:]] == [None, None]
    assert [g.staff_name for g in groups[1:]] == [UNASSIGNED_LABEL, UNASSIGNED_LABEL]
    assert sum(len(g.regions) for g in groups) == 6


@pytest.mark.parametrize("staff_count", [1, 2, 3, 4, 5, 7, 11, 25])
def test_partition_and_balance_properties(staff_count):
    districts = ["강남구", "서초구", "마포구", "종로구", "중구", "용산구", "강서구", "노원구", "수성구"]
    records = [Record(d, f"{d[:-1]}1동") for d in districts]
    groups = build_auto_groups(staff_count, Granularity.DISTRICT, districts, records, staff(staff_count))

    if staff_count > len(districts):
        expected = {f"{r.district} {r.subdistrict}" for r in records}
    else:
        expected = set(districts)
    flattened = [r for g in groups for r in g.regions]
    assert len(flattened) == len(set(flattened))
    assert set(flattened) == expected
    sizes = [len(g.regions) for g in groups]
    assert max(sizes) - min(sizes) <= 1
    assert min(sizes) >= 1
    assert len(groups) <= staff_count


def test_deterministic_output():
    args = (3, Granularity.DISTRICT, {"강남구", "서초구", "마포구", "종로구"}, PROPERTIES, staff(3))
    assert build_auto_groups(*args) == build_auto_groups(*args)


def test_partition_contiguous_sizes():
    assert partition_contiguous(list("abcdefg"), 3) == [["a", "b", "c"], ["d", "e"], ["f", "g"]]
    with pytest.raises(InvalidArgument):
        partition_contiguous(["a"], 0)


def test_unranked_districts_sort_after_ranked_ones():
    keys = ["해운대구", "강남구", "수성구", "마포구"]
    assert sort_region_keys(keys, Granularity.DISTRICT) == ["마포구", "강남구", "수성구", "해운대구"]


def test_subdistrict_order_groups_by_district_first():
    keys = ["강남구 역삼동", "마포구 합정동", "강남구 논현동", "해운대구 우동", "마포구 공덕동"]
    assert sort_region_keys(keys, Granularity.SUBDISTRICT) == [
        "마포구 공덕동",
        "마포구 합정동",
        "강남구 논현동",
        "강남구 역삼동",
        "해운대구 우동",
    ]


def test_precedence_table_is_swappable():
    reversed_ring = DistrictPrecedence(["강남구", "서초구", "마포구"])
    assert reversed_ring.priority_of("강남구") == 0
    assert reversed_ring.priority_of("종로구") is None
    groups = build_auto_groups(
        1, Granularity.DISTRICT, ["마포구", "강남구"], PROPERTIES, staff(1), precedence=reversed_ring,
    )
    assert groups[0].regions == ["강남구", "마포구"]
    assert SEOUL_RING.priority_of("은평구") == 0
    assert len(SEOUL_RING) == 25


def test_pad_with_staff_adds_empty_groups_for_unbound_staff():
    members = staff(3)
    groups = build_auto_groups(1, Granularity.DISTRICT, ["강남구"], PROPERTIES, members)
    padded = pad_with_staff(groups, members)

    assert [g.staff_id for g in padded] == ["user_0", "user_1", "user_2"]
    assert [g.regions for g in padded] == [["강남구"], [], []]
    assert [g.index for g in padded] == [0, 1, 2]


def test_build_region_buckets_counts():
    buckets = build_region_buckets(PROPERTIES + [Record("", "청담동")])

    districts = {b.key: b.count for b in buckets[Granularity.DISTRICT]}
    subdistricts = {b.key: b.count for b in buckets[Granularity.SUBDISTRICT]}
    assert districts == {"강남구": 3, "서초구": 1, "마포구": 2, "종로구": 1}
    assert subdistricts["강남구 역삼동"] == 2
    assert "청담동" not in subdistricts
    assert [b.key for b in buckets[Granularity.DISTRICT]] == ["마포구", "서초구", "강남구", "종로구"]


def test_escalation_reports_districts_without_subdistricts():
    properties = [Record("강남구", "역삼동"), Record("서초구"), Record("용산구")]
    selected = ["강남구", "서초구", "용산구"]

    groups = build_auto_groups(4, Granularity.DISTRICT, selected, properties, staff(4))

    assert [g.regions for g in groups] == [["강남구 역삼동"]]
    assert uncovered_districts(selected, groups) == ["서초구", "용산구"]


def test_nothing_uncovered_without_escalation():
    groups = build_auto_groups(1, Granularity.DISTRICT, ["강남구", "서초구"], PROPERTIES, staff(1))
    assert uncovered_districts(["강남구", "서초구"], groups) == []
