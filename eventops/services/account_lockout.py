# eventops/services/account_lockout.py
"""
Account lockout protection against brute-force logins.

Failed attempts are tracked per identifier (lower-cased email or client IP)
inside a rolling window. Reaching MAX_ATTEMPTS locks the identifier, and
the lock grows with repeated failures: 1 minute after 5, 5 minutes after
10, 15 minutes after 15 and an hour from 20 on.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.orm import Session

from eventops.models.failed_login_attempt import FailedLoginAttempt
from eventops.utils.time_utils import now_ms

logger = logging.getLogger(__name__)

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS

MAX_ATTEMPTS = 5
ATTEMPT_WINDOW_MS = 15 * MINUTE_MS
LOCKOUT_DURATIONS_MS = [1 * MINUTE_MS, 5 * MINUTE_MS, 15 * MINUTE_MS, 1 * HOUR_MS]
MAX_LOCKOUT_MS = 1 * HOUR_MS


@dataclass
class LockoutStatus:
    is_locked: bool
    remaining_attempts: int
    locked_until: Optional[int] = None  # epoch ms
    lockout_duration: Optional[int] = None  # ms left on the lock


def calculate_lockout_duration(failure_count: int) -> int:
    index = failure_count // MAX_ATTEMPTS - 1
    if index < 0:
        return MAX_LOCKOUT_MS
    return LOCKOUT_DURATIONS_MS[min(index, len(LOCKOUT_DURATIONS_MS) - 1)]


def format_lockout_duration(ms: int) -> str:
    minutes = math.ceil(ms / 60000)
    if minutes < 60:
        return f"{minutes} minute{'' if minutes == 1 else 's'}"
    hours = math.ceil(minutes / 60)
    return f"{hours} hour{'' if hours == 1 else 's'}"


def _get_record(db: Session, identifier: str) -> Optional[FailedLoginAttempt]:
    return (
        db.query(FailedLoginAttempt)
        .filter(FailedLoginAttempt.identifier == identifier.lower())
        .first()
    )


def check_lockout_status(
    db: Session, identifier: str, now: Optional[int] = None
) -> LockoutStatus:
    now = now if now is not None else now_ms()
    window_start = now - ATTEMPT_WINDOW_MS

    record = _get_record(db, identifier)
    if not record:
        return LockoutStatus(is_locked=False, remaining_attempts=MAX_ATTEMPTS)

    if record.locked_until and record.locked_until > now:
        return LockoutStatus(
            is_locked=True,
            remaining_attempts=0,
            locked_until=record.locked_until,
            lockout_duration=record.locked_until - now,
        )

    recent = [t for t in record.attempts or [] if t > window_start]
    return LockoutStatus(
        is_locked=False,
        remaining_attempts=max(0, MAX_ATTEMPTS - len(recent)),
    )


def record_failed_attempt(
    db: Session, identifier: str, now: Optional[int] = None
) -> LockoutStatus:
    now = now if now is not None else now_ms()
    window_start = now - ATTEMPT_WINDOW_MS
    identifier = identifier.lower()

    record = _get_record(db, identifier)

    attempts = [t for t in (record.attempts if record else None) or [] if t > window_start]
    attempts.append(now)

    locked_until = None
    if len(attempts) >= MAX_ATTEMPTS:
        locked_until = now + calculate_lockout_duration(len(attempts))
        logger.warning(
            f"Locking out {identifier} after {len(attempts)} failed attempts "
            f"for {format_lockout_duration(locked_until - now)}"
        )

    if record:
        record.attempts = attempts
        record.locked_until = locked_until
    else:
        record = FailedLoginAttempt(
            identifier=identifier,
            attempts=attempts,
            locked_until=locked_until,
            created_at=now,
        )
    db.add(record)
    db.commit()

    return LockoutStatus(
        is_locked=locked_until is not None,
        remaining_attempts=max(0, MAX_ATTEMPTS - len(attempts)),
        locked_until=locked_until,
        lockout_duration=locked_until - now if locked_until else None,
    )


def clear_failed_attempts(db: Session, identifier: str) -> None:
    record = _get_record(db, identifier)
    if record:
        db.delete(record)
        db.commit()


def cleanup_old_records(db: Session, now: Optional[int] = None) -> int:
    """Delete records older than a day that carry no active lock. Returns the count."""
    now = now if now is not None else now_ms()
    one_day_ago = now - DAY_MS

    old_records = (
        db.query(FailedLoginAttempt)
        .filter(
            FailedLoginAttempt.created_at < one_day_ago,
            (FailedLoginAttempt.locked_until == None)
            | (FailedLoginAttempt.locked_until < now),
        )
        .all()
    )
    for record in old_records:
        db.delete(record)
    if old_records:
        db.commit()

    return len(old_records)
