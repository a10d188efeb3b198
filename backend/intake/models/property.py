"""Property listing record."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from intake.models.common import new_id, utcnow


@dataclass
class Property:
    """A property listing taken in from CSV, the admin panel or the public form."""

    address: str
    normalized_address: str
    source: str = "general"  # auction, public, general
    price: int = 0
    region: str = ""  # 시/도
    district: str = ""  # 구
    subdistrict: str = ""  # 동/읍/면/리
    owner_name: str = ""
    phone: str = ""
    assignee_id: Optional[str] = None
    assignee_name: str = ""
    status: str = "review"  # active, hold, closed, review
    note: str = ""
    created_by_type: str = "admin"  # system, admin, admin_csv, public
    created_by_name: str = ""
    id: str = field(default_factory=lambda: new_id("prop"))
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def touch(self) -> None:
        self.updated_at = utcnow()
