"""Staff account model."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from intake.models.common import new_id, utcnow

ROLE_ADMIN = "admin"
ROLE_AGENT = "agent"


@dataclass
class RegionAssignment:
    """One region on a staff member's assignment list."""

    unit: str  # district, subdistrict
    name: str


@dataclass
class StaffAccount:
    """Admin or agent account; agents receive region assignments."""

    name: str
    password_hash: str
    role: str = ROLE_AGENT
    regions: list[RegionAssignment] = field(default_factory=list)
    is_active: bool = True
    id: str = field(default_factory=lambda: new_id("user"))
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    last_login: Optional[datetime] = None

    @property
    def is_agent(self) -> bool:
        return self.role == ROLE_AGENT

    def touch(self) -> None:
        self.updated_at = utcnow()
