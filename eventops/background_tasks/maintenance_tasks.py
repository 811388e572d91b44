# eventops/background_tasks/maintenance_tasks.py
"""
Periodic housekeeping jobs.

- cleanup_lockout_records(): Every hour
- expire_organization_invitations(): Every hour
"""

import logging

from eventops.crud import crud_organization
from eventops.db.session import SessionLocal
from eventops.services.account_lockout import cleanup_old_records

logger = logging.getLogger(__name__)


def cleanup_lockout_records():
    """
    Background task: Delete stale failed-login records.

    Records older than a day are removed unless they still hold an active lock.
    """
    db = SessionLocal()
    try:
        removed = cleanup_old_records(db)
        if removed:
            logger.info(f"Removed {removed} stale failed-login records")
    except Exception as e:
        db.rollback()
        logger.error(f"Error cleaning up failed-login records: {e}", exc_info=True)
        raise
    finally:
        db.close()


def expire_organization_invitations():
    """Background task: Mark pending invitations past their expiry as expired."""
    db = SessionLocal()
    try:
        expired = crud_organization.organization.expire_invitations(db)
        if expired:
            logger.info(f"Marked {expired} organization invitations as expired")
    except Exception as e:
        db.rollback()
        logger.error(f"Error expiring organization invitations: {e}", exc_info=True)
        raise
    finally:
        db.close()
