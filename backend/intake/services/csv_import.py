"""Service for parsing property CSV uploads."""
import csv
import io
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel

from intake.services.address import (
    collapse_whitespace,
    extract_district_and_subdistrict,
    normalize_address,
    normalize_phone,
    normalize_source,
    normalize_status,
    parse_price,
)

# Accepted header spellings per field, first match wins.
HEADER_ALIASES: Dict[str, Tuple[str, ...]] = {
    "source": ("source", "구분"),
    "address": ("address", "주소", "소재지"),
    "price": ("price", "sale_price", "매각가", "매각가(원)", "매각가격"),
    "region": ("region", "시도", "지역"),
    "district": ("district", "region_gu", "구"),
    "subdistrict": ("subdistrict", "dong", "region_dong", "동"),
    "owner_name": ("ownerName", "owner_name", "소유자"),
    "phone": ("phone", "전화번호", "연락처"),
    "assignee_name": ("assigneeName", "assignee_name", "담당자"),
    "status": ("status", "상태"),
    "note": ("note", "비고", "memo"),
}

SAMPLE_CSV_SCHEMA = [
    "source(auction|public)",
    "address",
    "price",
    "region",
    "district",
    "subdistrict",
    "ownerName",
    "phone",
    "assigneeName",
    "status(active|hold|closed)",
    "note",
]

EXAMPLE_CSV = (
    "source,address,price,region,district,subdistrict,ownerName,phone,assigneeName,status,note\n"
    "auction,서울특별시 강동구 천호동 12-3,850000000,서울특별시,강동구,천호동,,,담당자1,active,1차 업로드 샘플"
)


class PropertyDraft(BaseModel):
    """One usable CSV row, normalized and ready to be stored."""
    source: str
    address: str
    normalized_address: str
    price: int = 0
    region: str = ""
    district: str = ""
    subdistrict: str = ""
    owner_name: str = ""
    phone: str = ""
    assignee_name: str = ""
    status: str = "review"
    note: str = ""


def _clean_header(value: Optional[str]) -> str:
    return str(value or "").lstrip("\ufeff").strip()


def _pick(row: Dict[str, str], aliases: Tuple[str, ...]) -> str:
    for name in aliases:
        value = row.get(name)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def read_csv_rows(content: str) -> List[Dict[str, str]]:
    """Header-keyed rows of a CSV text; blank rows are left out."""
    reader = csv.reader(io.StringIO(content.strip()))
    header = next(reader, None)
    if not header:
        return []
    header = [_clean_header(h) for h in header]

    rows = []
    for values in reader:
        if not any(v.strip() for v in values):
            continue
        rows.append({name: values[idx] if idx < len(values) else "" for idx, name in enumerate(header)})
    return rows


class PropertyCsvParser:
    @staticmethod
    def _pick(row: Dict[str, str], field: str) -> str:
        return _pick(row, HEADER_ALIASES[field])

    @classmethod
    def map_row(cls, row: Dict[str, str], default_source: str = "auction") -> Optional[PropertyDraft]:
        """Normalize one CSV row; rows without an address are dropped (None)."""
        address = collapse_whitespace(cls._pick(row, "address"))
        if not address:
            return None

        district, subdistrict = extract_district_and_subdistrict(address)
        return PropertyDraft(
            source=normalize_source(cls._pick(row, "source") or default_source),
            address=address,
            normalized_address=normalize_address(address),
            price=parse_price(cls._pick(row, "price")),
            region=cls._pick(row, "region"),
            district=cls._pick(row, "district") or district,
            subdistrict=cls._pick(row, "subdistrict") or subdistrict,
            owner_name=cls._pick(row, "owner_name"),
            phone=normalize_phone(cls._pick(row, "phone")),
            assignee_name=cls._pick(row, "assignee_name"),
            status=normalize_status(cls._pick(row, "status")),
            note=cls._pick(row, "note"),
        )

    @classmethod
    def parse(cls, content: str, default_source: str = "auction") -> Tuple[List[PropertyDraft], int]:
        """
        Parse CSV text into property drafts.

        Args:
            content: The file content as a string, header row first.
            default_source: Source used when a row has no source column.

        Returns:
            (drafts, skipped) where skipped counts non-blank rows that had no
            usable address.
        """
        drafts = []
        skipped = 0
        for row in read_csv_rows(content):
            draft = cls.map_row(row, default_source)
            if draft is None:
                skipped += 1
                continue
            drafts.append(draft)
        return drafts, skipped


# Own column names first, then the public "전국 중개사무소 정보" layout.
OFFICE_HEADER_ALIASES: Dict[str, Tuple[str, ...]] = {
    "office_name": ("officeName", "office_name", "사업자상호", "사무소명"),
    "address": ("법정동명", "소재지", "주소", "address"),
    "region": ("region", "시도", "지역"),
    "district": ("district", "시군구", "구군"),
    "manager_name": ("managerName", "manager_name", "대표자명", "중개업자명"),
    "office_phone": ("officePhone", "office_phone", "전화번호", "대표전화"),
    "mobile_phone": ("mobilePhone", "mobile_phone", "핸드폰번호", "휴대폰번호"),
    "note": ("note", "비고", "memo"),
    "office_reg_no": ("등록번호", "officeRegNo", "office_reg_no"),
    "broker_type": ("중개업자종별명",),
    "position": ("직위구분명",),
    "base_date": ("데이터기준일자",),
    "legal_code": ("법정동코드",),
}

OFFICE_SAMPLE_CSV_SCHEMA = [
    "officeName",
    "address",
    "region",
    "district",
    "managerName",
    "officePhone",
    "mobilePhone",
    "note",
    "(또는 공공데이터 컬럼) 법정동명,등록번호,사업자상호,중개업자명,직위구분명,핸드폰번호 ...",
]

OFFICE_EXAMPLE_CSV = (
    "법정동명,등록번호,사업자상호,중개업자명,직위구분명,핸드폰번호\n"
    "서울특별시 강서구,11500-2026-00001,좋은공인중개사사무소,홍길동,대표,010-1111-2222"
)

OFFICE_CSV_NOTE = "전국 중개사무소 정보(공공데이터) 형식을 지원합니다. 등록번호 기준으로 사무소 단위로 묶어 등록합니다."

REPRESENTATIVE_MARK = "대표"
LICENSED_BROKER_MARK = "공인중개사"


class OfficeDraft(BaseModel):
    """One realtor office merged from one or more CSV rows."""
    office_name: str
    address: str
    normalized_address: str
    region: str = ""
    district: str = ""
    manager_name: str = ""
    office_phone: str = ""
    mobile_phone: str = ""
    note: str = ""
    office_reg_no: str = ""

    @property
    def group_key(self) -> str:
        if self.office_reg_no:
            return f"reg:{self.office_reg_no}"
        return f"oa:{self.office_name}|{self.normalized_address}"


class OfficeCsvParser:
    """Parser for realtor office uploads.

    Public-data exports list one row per person working at an office. Rows
    sharing a registration number (or, without one, the same name and
    address) are merged into a single office.
    """

    @staticmethod
    def _pick(row: Dict[str, str], field: str) -> str:
        return _pick(row, OFFICE_HEADER_ALIASES[field])

    @classmethod
    def map_row(cls, row: Dict[str, str]) -> Optional[OfficeDraft]:
        """Normalize one person/office row; rows without a name or address give None."""
        office_name = cls._pick(row, "office_name")
        address = collapse_whitespace(cls._pick(row, "address"))
        if not office_name or not address:
            return None

        reg_no = cls._pick(row, "office_reg_no")
        note_parts = [
            f"{label}:{value}"
            for label, value in (
                ("등록번호", reg_no),
                ("종별", cls._pick(row, "broker_type")),
                ("직위", cls._pick(row, "position")),
                ("기준일", cls._pick(row, "base_date")),
                ("법정동코드", cls._pick(row, "legal_code")),
            )
            if value
        ]
        if cls._pick(row, "note"):
            note_parts.append(cls._pick(row, "note"))

        district, _ = extract_district_and_subdistrict(address)
        return OfficeDraft(
            office_name=office_name,
            address=address,
            normalized_address=normalize_address(address),
            region=cls._pick(row, "region") or address.split(" ")[0],
            district=cls._pick(row, "district") or district,
            manager_name=cls._pick(row, "manager_name"),
            office_phone=normalize_phone(cls._pick(row, "office_phone")),
            mobile_phone=normalize_phone(cls._pick(row, "mobile_phone")),
            note=" | ".join(note_parts),
            office_reg_no=reg_no,
        )

    @classmethod
    def _merge(cls, members: List[Tuple[Dict[str, str], OfficeDraft]]) -> OfficeDraft:
        def marked(field: str, mark: str):
            return [draft for row, draft in members if mark in cls._pick(row, field)]

        representatives = marked("position", REPRESENTATIVE_MARK)
        candidates = representatives or marked("broker_type", LICENSED_BROKER_MARK)
        rep = candidates[0] if candidates else members[0][1]

        drafts = [draft for _, draft in members]
        fill = {}
        for field in ("manager_name", "office_phone", "mobile_phone"):
            fill[field] = getattr(rep, field) or next((getattr(d, field) for d in drafts if getattr(d, field)), "")

        summary = f"행수:{len(members)}"
        if representatives:
            summary += f",대표행:{len(representatives)}"
        note = f"{rep.note} | {summary}" if rep.note else summary
        return rep.model_copy(update={**fill, "note": note})

    @classmethod
    def parse(cls, content: str) -> Tuple[List[OfficeDraft], int]:
        """
        Parse CSV text into merged office drafts.

        Returns:
            (offices, skipped) where offices keep first-seen order and skipped
            counts rows without an office name or address.
        """
        buckets: Dict[str, List[Tuple[Dict[str, str], OfficeDraft]]] = {}
        skipped = 0
        for row in read_csv_rows(content):
            draft = cls.map_row(row)
            if draft is None:
                skipped += 1
                continue
            buckets.setdefault(draft.group_key, []).append((row, draft))
        return [cls._merge(members) for members in buckets.values()], skipped
