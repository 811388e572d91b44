# eventops/services/event_access.py
"""
Helper functions for event ownership checks shared by the event-scoped routers.
"""
import logging
from sqlalchemy.orm import Session

from eventops.core.errors import ForbiddenError, not_found
from eventops.models.event import Event
from eventops.schemas.token import TokenPayload

logger = logging.getLogger(__name__)

ADMIN_ROLES = ("admin", "superadmin")


def get_owned_event(
    db: Session,
    event_id: str,
    current_user: TokenPayload,
    allow_admin: bool = False,
) -> Event:
    """
    Load an event the current user may manage.

    Args:
        db: Database session
        event_id: Event ID to check
        current_user: Token payload of the caller
        allow_admin: Let platform admins through as well as the owner

    Returns: The event

    Raises: NotFoundError if the event does not exist, ForbiddenError if
    the caller does not own it
    """
    event = db.query(Event).filter(Event.id == event_id).first()

    if not event:
        raise not_found("Event")

    if event.owner_id != current_user.sub:
        if allow_admin and current_user.role in ADMIN_ROLES:
            return event
        logger.info(f"User {current_user.sub} denied access to event {event_id}")
        raise ForbiddenError("Not authorized to access this event")

    return event
