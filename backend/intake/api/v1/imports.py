"""CSV import API endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from intake.auth.jwt import get_current_active_admin
from intake.models import Property, RealtorOffice, StaffAccount
from intake.schemas.office import OfficeCsvImportRequest, OfficeCsvImportResponse
from intake.schemas.property import CsvImportRequest, CsvImportResponse, CsvSchemaResponse
from intake.services.address import normalize_source
from intake.services.csv_import import (
    EXAMPLE_CSV,
    OFFICE_CSV_NOTE,
    OFFICE_EXAMPLE_CSV,
    OFFICE_SAMPLE_CSV_SCHEMA,
    SAMPLE_CSV_SCHEMA,
    OfficeCsvParser,
    PropertyCsvParser,
)
from intake.store import InMemoryStore, get_store
from intake.utils.audit import log_audit_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/import", tags=["Import"])


@router.get("/properties-csv", response_model=CsvSchemaResponse)
async def get_property_csv_schema(
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Describe the expected property CSV layout."""
    return CsvSchemaResponse(sample_csv_schema=SAMPLE_CSV_SCHEMA, example_csv=EXAMPLE_CSV)


@router.post("/properties-csv", response_model=CsvImportResponse)
async def import_properties_csv(
    request: CsvImportRequest,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Import properties from CSV text, skipping addresses that already exist."""
    csv_text = request.csv_text.strip()
    if not csv_text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="csv_text가 필요합니다.",
        )

    default_source = normalize_source(request.source)
    drafts, errors = PropertyCsvParser.parse(csv_text, default_source)

    inserted = 0
    duplicate_addresses = []
    for draft in drafts:
        if store.address_exists(draft.normalized_address):
            duplicate_addresses.append(draft.address)
            continue

        assignee = store.get_staff_by_name(draft.assignee_name) if draft.assignee_name else None
        store.add_property(
            Property(
                **draft.model_dump(),
                assignee_id=assignee.id if assignee else None,
                created_by_type="admin_csv",
                created_by_name=current_user.name,
            )
        )
        inserted += 1

    logger.info(
        "CSV import: %d inserted, %d duplicates, %d rows without address",
        inserted, len(duplicate_addresses), errors,
    )
    log_audit_event(
        "properties_csv_imported",
        actor=current_user,
        details={
            "inserted": inserted,
            "duplicates": len(duplicate_addresses),
            "errors": errors,
        },
    )

    return CsvImportResponse(
        inserted=inserted,
        duplicates=len(duplicate_addresses),
        duplicate_addresses=duplicate_addresses,
        errors=errors,
        total_properties=len(store.properties),
    )


@router.get("/realtor-offices-csv", response_model=CsvSchemaResponse)
async def get_office_csv_schema(
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Describe the accepted realtor office CSV layouts."""
    return CsvSchemaResponse(
        sample_csv_schema=OFFICE_SAMPLE_CSV_SCHEMA,
        example_csv=OFFICE_EXAMPLE_CSV,
        note=OFFICE_CSV_NOTE,
    )


@router.post("/realtor-offices-csv", response_model=OfficeCsvImportResponse)
async def import_offices_csv(
    request: OfficeCsvImportRequest,
    store: InMemoryStore = Depends(get_store),
    current_user: StaffAccount = Depends(get_current_active_admin),
):
    """Import realtor offices, merging person-level rows by registration number.

    An office is a duplicate when its registration number is already stored,
    or when an office with the same name and normalized address exists.
    """
    csv_text = request.csv_text.strip()
    if not csv_text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="csv_text가 필요합니다.",
        )

    offices, skipped = OfficeCsvParser.parse(csv_text)

    inserted = 0
    duplicates = 0
    for draft in offices:
        if store.office_reg_no_exists(draft.office_reg_no) or store.office_exists(
            draft.office_name, draft.normalized_address
        ):
            duplicates += 1
            continue
        store.add_office(RealtorOffice(**draft.model_dump()))
        inserted += 1

    logger.info(
        "Office CSV import: %d offices, %d inserted, %d duplicates, %d rows skipped",
        len(offices), inserted, duplicates, skipped,
    )
    log_audit_event(
        "realtor_offices_csv_imported",
        actor=current_user,
        details={"inserted": inserted, "duplicates": duplicates, "skipped": skipped},
    )

    return OfficeCsvImportResponse(
        grouped_offices=len(offices),
        inserted=inserted,
        duplicates=duplicates,
        skipped=skipped,
        total_offices=len(store.realtor_offices),
    )
