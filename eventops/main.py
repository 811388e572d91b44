# eventops/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from eventops import models  # noqa: F401  registers every table on Base.metadata
from eventops.api.v1.api import api_router
from eventops.core.config import settings
from eventops.core.errors import AppError, app_error_handler
from eventops.core.limiter import limiter
from eventops.core.security import build_jwks
from eventops.db.base_class import Base
from eventops.db.session import engine
from eventops.scheduler import init_scheduler, shutdown_scheduler

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# This function will run once when the application starts up.
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables checked and created if necessary.")
    if settings.ENABLE_SCHEDULER:
        init_scheduler()
    yield
    if settings.ENABLE_SCHEDULER:
        shutdown_scheduler()
    logger.info("Application shutting down...")


app = FastAPI(
    title="EventOps Service",
    version="1.0.0",
    description="""
        **EventOps Event Operations Service**

        ## Features

        * **Event Management**: Create, update, and manage events
        * **Planning**: Tasks, budget items and notes per event
        * **Attendees**: Guest lists, stats and check-in
        * **Promo Codes**: Discount codes with usage limits and validation
        * **Sponsors & Vendors**: Directory with admin approval and event links
        * **Organizations**: Members, invitations and roles
        * **Moderation**: User suspension, role changes and event flags
        * **AI Assistant**: Chat-based planning with confirmed actions

        ## Authentication

        Most endpoints require JWT authentication via the `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(AppError, app_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,  # Allow cookies and authorization headers
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "EventOps service is running"}


@app.get("/.well-known/jwks.json", include_in_schema=False)
def jwks():
    if settings.JWT_ALGORITHM != "RS256" or not settings.JWT_PUBLIC_KEY:
        raise HTTPException(status_code=404, detail="JWKS is only published for RS256 keys")
    return build_jwks(settings.JWT_PUBLIC_KEY, settings.JWT_KEY_ID)
