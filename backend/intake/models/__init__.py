"""Record types held by the in-memory store."""
from intake.models.common import new_id, utcnow
from intake.models.office import RealtorOffice
from intake.models.property import Property
from intake.models.user import ROLE_ADMIN, ROLE_AGENT, RegionAssignment, StaffAccount

__all__ = [
    "new_id",
    "utcnow",
    "Property",
    "RealtorOffice",
    "RegionAssignment",
    "StaffAccount",
    "ROLE_ADMIN",
    "ROLE_AGENT",
]
