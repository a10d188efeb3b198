"""API v1 router aggregation."""
from fastapi import APIRouter

from intake.api.v1.auth import router as auth_router
from intake.api.v1.staff import router as staff_router
from intake.api.v1.properties import router as properties_router
from intake.api.v1.imports import router as imports_router
from intake.api.v1.public_listings import router as public_listings_router
from intake.api.v1.realtor_offices import router as realtor_offices_router
from intake.api.v1.region_assignments import router as region_assignments_router

router = APIRouter()

router.include_router(auth_router)
router.include_router(staff_router)
router.include_router(properties_router)
router.include_router(imports_router)
router.include_router(public_listings_router)
router.include_router(realtor_offices_router)
router.include_router(region_assignments_router)
