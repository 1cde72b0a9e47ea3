"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from autocare.api.auth import router as auth_router
from autocare.api.appointments import router as appointments_router
from autocare.api.workers import router as workers_router
from autocare.api.service_types import router as service_types_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(appointments_router)
api_router.include_router(workers_router)
api_router.include_router(service_types_router)
