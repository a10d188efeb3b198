"""Region units, district precedence hints and the region ordering rules."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence


class Granularity(str, Enum):
    """Unit a region key is expressed in."""

    DISTRICT = "district"
    SUBDISTRICT = "subdistrict"

    @property
    def label(self) -> str:
        return "구 단위" if self is Granularity.DISTRICT else "동 단위"


@dataclass(frozen=True)
class RegionBucket:
    """A region key with the number of properties currently mapped to it."""

    key: str
    unit: Granularity
    count: int


class DistrictPrecedence:
    """Ordering hint table for district names.

    Ranked names sort by their position in the table. Names the table does not
    know sort after every ranked name.
    """

    def __init__(self, names: Sequence[str]):
        self._rank: dict[str, int] = {}
        for name in names:
            self._rank.setdefault(name, len(self._rank))

    def __len__(self) -> int:
        return len(self._rank)

    def priority_of(self, name: str) -> Optional[int]:
        return self._rank.get(name)

    def district_sort_key(self, name: str) -> tuple[int, int, str]:
        rank = self.priority_of(name)
        if rank is None:
            return (1, 0, name)
        return (0, rank, name)


# 서울 25개 구: 북서쪽 은평구에서 시작해 서쪽 외곽 → 한강 이남 → 동쪽 → 도심 순으로
# 한 바퀴 도는 순서. 인접한 구가 대체로 앞뒤에 오도록 잡은 근사치.
SEOUL_RING = DistrictPrecedence(
    [
        "은평구",
        "서대문구",
        "마포구",
        "강서구",
        "양천구",
        "구로구",
        "금천구",
        "영등포구",
        "동작구",
        "관악구",
        "서초구",
        "강남구",
        "송파구",
        "강동구",
        "광진구",
        "성동구",
        "동대문구",
        "중랑구",
        "노원구",
        "도봉구",
        "강북구",
        "성북구",
        "종로구",
        "중구",
        "용산구",
    ]
)


def split_subdistrict_key(key: str) -> tuple[str, str]:
    """Split "강남구 역삼동" into ("강남구", "역삼동").

    The first space-separated segment is the district part; a key without a
    space is all district part.
    """
    district, _, rest = key.partition(" ")
    return district, rest


def sort_region_keys(
    keys: Iterable[str],
    granularity: Granularity,
    precedence: DistrictPrecedence = SEOUL_RING,
) -> list[str]:
    """Deterministic ordering that makes contiguous chunks roughly local.

    Lexical tie-breaks use code point order, which matches dictionary order
    for precomposed Hangul syllables.
    """
    if Granularity(granularity) is Granularity.DISTRICT:
        return sorted(keys, key=precedence.district_sort_key)

    def subdistrict_sort_key(key: str):
        district, rest = split_subdistrict_key(key)
        return (precedence.district_sort_key(district), rest)

    return sorted(keys, key=subdistrict_sort_key)
