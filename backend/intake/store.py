"""Process-local in-memory store.

The store is an explicit object owned by the application (``app.state.store``)
and handed to request handlers through the ``get_store`` dependency. Nothing
is persisted; ``reset()`` returns it to the seeded state.
"""
import logging
from typing import List, Optional

from fastapi import Request

from intake.config import Settings, get_settings
from intake.models import (
    ROLE_ADMIN,
    ROLE_AGENT,
    Property,
    RealtorOffice,
    RegionAssignment,
    StaffAccount,
)
from intake.services.address import normalize_address
from intake.services.grouping import StaffIdentity

logger = logging.getLogger(__name__)


class InMemoryStore:
    """Staff accounts, property listings and realtor offices."""

    def __init__(self, settings: Optional[Settings] = None, seed: Optional[bool] = None):
        self.settings = settings or get_settings()
        self._seed = self.settings.SEED_SAMPLE_DATA if seed is None else seed
        self.staff: List[StaffAccount] = []
        self.properties: List[Property] = []
        self.realtor_offices: List[RealtorOffice] = []
        self.reset()

    def reset(self) -> None:
        """Drop every record and reseed when seeding is enabled."""
        self.staff = []
        self.properties = []
        self.realtor_offices = []
        if self._seed:
            self._seed_sample_data()

    def _seed_sample_data(self) -> None:
        from intake.auth.jwt import hash_password

        settings = self.settings
        admin = StaffAccount(
            name=settings.SEED_ADMIN_NAME,
            password_hash=hash_password(settings.SEED_ADMIN_PASSWORD),
            role=ROLE_ADMIN,
        )
        agent = StaffAccount(
            name=settings.SEED_AGENT_NAME,
            password_hash=hash_password(settings.SEED_AGENT_PASSWORD),
            role=ROLE_AGENT,
            regions=[RegionAssignment(unit="district", name="강남구")],
        )
        self.staff.extend([admin, agent])

        samples = [
            ("auction", "서울특별시 강남구 역삼동 123-45", 1250000000, "강남구", "역삼동", agent, "샘플 경매 물건"),
            ("public", "서울특별시 송파구 문정동 88-1", 980000000, "송파구", "문정동", None, "샘플 공매 물건"),
        ]
        for source, address, price, district, subdistrict, assignee, note in samples:
            self.properties.append(
                Property(
                    source=source,
                    address=address,
                    normalized_address=normalize_address(address),
                    price=price,
                    region="서울특별시",
                    district=district,
                    subdistrict=subdistrict,
                    assignee_id=assignee.id if assignee else None,
                    assignee_name=assignee.name if assignee else "",
                    status="active",
                    note=note,
                    created_by_type="system",
                    created_by_name="seed",
                )
            )
        logger.info("Seeded store with %d staff and %d properties", len(self.staff), len(self.properties))

    # --- Staff ---
    def get_staff(self, staff_id: str) -> Optional[StaffAccount]:
        return next((u for u in self.staff if u.id == staff_id), None)

    def get_staff_by_name(self, name: str) -> Optional[StaffAccount]:
        return next((u for u in self.staff if u.name == name), None)

    def agents(self) -> List[StaffAccount]:
        """Agent accounts in creation order."""
        return [u for u in self.staff if u.is_agent and u.is_active]

    def staff_identities(self) -> List[StaffIdentity]:
        return [StaffIdentity(id=u.id, name=u.name) for u in self.agents()]

    def admin_count(self) -> int:
        return sum(1 for u in self.staff if u.role == ROLE_ADMIN)

    # --- Properties ---
    def get_property(self, property_id: str) -> Optional[Property]:
        return next((p for p in self.properties if p.id == property_id), None)

    def address_exists(self, normalized_address: str, exclude_id: Optional[str] = None) -> bool:
        return any(
            p.normalized_address == normalized_address and p.id != exclude_id
            for p in self.properties
        )

    def add_property(self, prop: Property) -> Property:
        """Newest first, like the listing views expect."""
        self.properties.insert(0, prop)
        return prop

    def remove_property(self, prop: Property) -> None:
        self.properties.remove(prop)

    def properties_assigned_to(self, staff_id: str) -> List[Property]:
        return [p for p in self.properties if p.assignee_id == staff_id]

    # --- Realtor offices ---
    def get_office(self, office_id: str) -> Optional[RealtorOffice]:
        return next((o for o in self.realtor_offices if o.id == office_id), None)

    def office_exists(self, office_name: str, normalized_address: str, exclude_id: Optional[str] = None) -> bool:
        return any(
            o.office_name == office_name
            and o.normalized_address == normalized_address
            and o.id != exclude_id
            for o in self.realtor_offices
        )

    def office_reg_no_exists(self, office_reg_no: str) -> bool:
        return bool(office_reg_no) and any(o.office_reg_no == office_reg_no for o in self.realtor_offices)

    def add_office(self, office: RealtorOffice) -> RealtorOffice:
        self.realtor_offices.insert(0, office)
        return office


def get_store(request: Request) -> InMemoryStore:
    """Get the store attached to the running application."""
    return request.app.state.store
