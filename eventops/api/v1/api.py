# eventops/api/v1/api.py

from fastapi import APIRouter
from eventops.api.v1.endpoints import (
    assistant,
    attendees,
    auth,
    budget,
    events,
    health,
    moderation,
    notes,
    organizations,
    promo_codes,
    sponsors,
    tasks,
    vendors,
)

# This is the main router for the v1 API.
# It will include all the specific endpoint routers.
api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(events.router)
api_router.include_router(tasks.router)
api_router.include_router(budget.router)
api_router.include_router(notes.router)
api_router.include_router(attendees.router)
api_router.include_router(sponsors.event_router)
api_router.include_router(vendors.event_router)
api_router.include_router(promo_codes.router)
api_router.include_router(sponsors.router)
api_router.include_router(vendors.router)
api_router.include_router(organizations.router)
api_router.include_router(moderation.router)
api_router.include_router(assistant.router)
