"""Realtor office registry record."""
from dataclasses import dataclass, field
from datetime import datetime

from intake.models.common import new_id, utcnow


@dataclass
class RealtorOffice:
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
    id: str = field(default_factory=lambda: new_id("office"))
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def touch(self) -> None:
        self.updated_at = utcnow()
