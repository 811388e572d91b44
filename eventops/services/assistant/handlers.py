# eventops/services/assistant/handlers.py
"""
Executors for assistant tool calls.

Each handler receives the DB session, the caller's token payload and the
tool input the model produced, and returns `(summary, data)`. Ownership and
catalog rules are the same ones the REST routers enforce.
"""

import logging
from datetime import datetime, time, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from sqlalchemy.orm import Session

from eventops.core.errors import AppError, ValidationError, not_found
from eventops.crud import (
    crud_event,
    crud_sponsor,
    crud_task,
    crud_user,
    crud_vendor,
)
from eventops.schemas.assistant import ToolResult
from eventops.schemas.event import EventCreate, EventUpdate
from eventops.schemas.task import TaskCreate
from eventops.schemas.token import TokenPayload
from eventops.services.event_access import get_owned_event

logger = logging.getLogger(__name__)

HandlerResult = Tuple[str, Any]
Handler = Callable[[Session, TokenPayload, Dict[str, Any]], HandlerResult]

DEFAULT_LIMIT = 5
MAX_LIMIT = 20


def _to_cents(amount: Optional[float]) -> Optional[int]:
    if amount is None:
        return None
    return int(round(float(amount) * 100))


def _combine(date_str: Optional[str], time_str: Optional[str]) -> Optional[datetime]:
    """Turn 'YYYY-MM-DD' plus optional 'HH:MM' into a UTC datetime."""
    if not date_str:
        return None
    try:
        day = datetime.strptime(date_str, "%Y-%m-%d").date()
        moment = datetime.strptime(time_str, "%H:%M").time() if time_str else time(0, 0)
    except ValueError:
        raise ValidationError(
            f"Invalid date/time: {date_str} {time_str or ''}".strip(), field="start_date"
        )
    return datetime.combine(day, moment, tzinfo=timezone.utc)


def _limit(args: Dict[str, Any]) -> int:
    return max(1, min(int(args.get("limit") or DEFAULT_LIMIT), MAX_LIMIT))


def _event_data(event) -> Dict[str, Any]:
    return {
        "id": event.id,
        "title": event.title,
        "event_type": event.event_type,
        "status": event.status,
        "start_date": event.start_date.isoformat() if event.start_date else None,
        "end_date": event.end_date.isoformat() if event.end_date else None,
        "location": event.location,
        "budget": event.budget,
        "expected_attendees": event.expected_attendees,
    }


# ---- events ----

def create_event(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    start = _combine(args.get("start_date"), args.get("start_time"))
    end = None
    if args.get("end_date") or args.get("end_time"):
        end = _combine(args.get("end_date") or args.get("start_date"), args.get("end_time"))

    event_in = EventCreate(
        title=args["title"],
        description=args.get("description"),
        event_type=args.get("event_type"),
        start_date=start,
        end_date=end,
        location=args.get("location"),
        budget=_to_cents(args.get("budget")),
        expected_attendees=args.get("expected_attendees"),
        status="planning",
    )
    event = crud_event.event.create_with_owner(db, obj_in=event_in, owner_id=user.sub)
    logger.info(f"Assistant created event {event.id} for user {user.sub}")
    return f"Created event '{event.title}'", _event_data(event)


def update_event(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    event = get_owned_event(db, args["event_id"], user)

    changes: Dict[str, Any] = {
        key: args[key]
        for key in ("title", "description", "status", "location", "expected_attendees")
        if args.get(key) is not None
    }
    if args.get("budget") is not None:
        changes["budget"] = _to_cents(args["budget"])
    if args.get("start_date"):
        changes["start_date"] = _combine(args["start_date"], args.get("start_time"))
    if not changes:
        raise ValidationError("No fields to update")

    event = crud_event.event.update(db, db_obj=event, obj_in=EventUpdate(**changes))
    return f"Updated event '{event.title}'", _event_data(event)


def get_event_details(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    event = get_owned_event(db, args["event_id"], user)
    data = _event_data(event)
    data["description"] = event.description
    data["task_summary"] = crud_task.task.get_summary(db, event_id=event.id)
    return f"Loaded event '{event.title}'", data


def get_upcoming_events(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    events = crud_event.event.get_upcoming(db, owner_id=user.sub, limit=MAX_LIMIT)
    if args.get("status"):
        events = [event for event in events if event.status == args["status"]]
    events = events[: _limit(args)]
    return f"Found {len(events)} upcoming event(s)", [_event_data(e) for e in events]


# ---- vendors ----

def search_vendors(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    vendors = crud_vendor.vendor.get_approved(db, facet=args.get("category"))

    location = (args.get("location") or "").lower()
    if location:
        vendors = [v for v in vendors if v.location and location in v.location.lower()]
    if args.get("min_rating") is not None:
        vendors = [v for v in vendors if (v.rating or 0) >= float(args["min_rating"])]

    vendors = vendors[: _limit(args)]
    data = [
        {
            "id": v.id,
            "name": v.name,
            "category": v.category,
            "location": v.location,
            "rating": v.rating,
            "price_min": v.price_min,
            "price_max": v.price_max,
        }
        for v in vendors
    ]
    return f"Found {len(data)} vendor(s)", data


def add_vendor_to_event(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    event = get_owned_event(db, args["event_id"], user)
    vendor = crud_vendor.vendor.get(db, id=args["vendor_id"])
    if not vendor or vendor.status != "approved":
        raise not_found("Vendor")

    link, existed = crud_vendor.event_vendor.create_link(
        db,
        event_id=event.id,
        target_id=vendor.id,
        proposed_budget=_to_cents(args.get("proposed_budget")),
        notes=args.get("notes"),
    )
    if existed:
        return f"{vendor.name} is already linked to '{event.title}'", {"id": link.id, "status": link.status}
    return f"Added {vendor.name} to '{event.title}'", {"id": link.id, "status": link.status}


# ---- sponsors ----

def search_sponsors(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    sponsors = crud_sponsor.sponsor.get_approved(db, facet=args.get("industry"))

    min_budget = _to_cents(args.get("min_budget"))
    max_budget = _to_cents(args.get("max_budget"))
    if min_budget is not None:
        sponsors = [s for s in sponsors if s.budget_max is None or s.budget_max >= min_budget]
    if max_budget is not None:
        sponsors = [s for s in sponsors if s.budget_min is None or s.budget_min <= max_budget]
    if args.get("tier"):
        sponsors = [s for s in sponsors if args["tier"] in (s.sponsorship_tiers or [])]

    sponsors = sponsors[: _limit(args)]
    data = [
        {
            "id": s.id,
            "name": s.name,
            "industry": s.industry,
            "sponsorship_tiers": s.sponsorship_tiers or [],
            "budget_min": s.budget_min,
            "budget_max": s.budget_max,
        }
        for s in sponsors
    ]
    return f"Found {len(data)} sponsor(s)", data


def add_sponsor_to_event(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    event = get_owned_event(db, args["event_id"], user)
    sponsor = crud_sponsor.sponsor.get(db, id=args["sponsor_id"])
    if not sponsor or sponsor.status != "approved":
        raise not_found("Sponsor")

    link, existed = crud_sponsor.event_sponsor.create_link(
        db,
        event_id=event.id,
        target_id=sponsor.id,
        tier=args.get("tier"),
        proposed_amount=_to_cents(args.get("proposed_amount")),
    )
    if existed:
        return f"{sponsor.name} is already linked to '{event.title}'", {"id": link.id, "status": link.status}
    return f"Added {sponsor.name} to '{event.title}'", {"id": link.id, "status": link.status}


# ---- tasks ----

def create_task(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    event = get_owned_event(db, args["event_id"], user)
    task_in = TaskCreate(
        title=args["title"],
        description=args.get("description"),
        category=args.get("category"),
        priority=args.get("priority") or "medium",
        due_date=_combine(args.get("due_date"), None),
    )
    task = crud_task.task.create_for_event(db, obj_in=task_in, event_id=event.id)
    return f"Added task '{task.title}' to '{event.title}'", {
        "id": task.id,
        "title": task.title,
        "priority": task.priority,
        "status": task.status,
    }


# ---- profile ----

def get_user_profile(db: Session, user: TokenPayload, args: Dict[str, Any]) -> HandlerResult:
    db_user = crud_user.user.get(db, id=user.sub)
    if not db_user:
        raise not_found("User")
    upcoming = crud_event.event.get_upcoming(db, owner_id=db_user.id, limit=MAX_LIMIT)
    return "Loaded your profile", {
        "id": db_user.id,
        "name": db_user.name,
        "email": db_user.email,
        "role": db_user.role,
        "upcoming_events": len(upcoming),
    }


TOOL_HANDLERS: Dict[str, Handler] = {
    "create_event": create_event,
    "update_event": update_event,
    "get_event_details": get_event_details,
    "get_upcoming_events": get_upcoming_events,
    "search_vendors": search_vendors,
    "add_vendor_to_event": add_vendor_to_event,
    "search_sponsors": search_sponsors,
    "add_sponsor_to_event": add_sponsor_to_event,
    "create_task": create_task,
    "get_user_profile": get_user_profile,
}


def execute_tool(
    db: Session, user: TokenPayload, tool_name: str, tool_input: Dict[str, Any]
) -> ToolResult:
    """Run a tool call. Failures come back as an unsuccessful ToolResult."""
    handler = TOOL_HANDLERS.get(tool_name)
    if handler is None:
        return ToolResult(
            tool_name=tool_name,
            success=False,
            summary=f"Unknown tool: {tool_name}",
            error=f"Unknown tool: {tool_name}",
        )

    try:
        summary, data = handler(db, user, tool_input or {})
    except AppError as e:
        logger.info(f"Tool {tool_name} failed: {e.message}")
        return ToolResult(tool_name=tool_name, success=False, summary=e.message, error=e.message)
    except KeyError as e:
        message = f"Missing required field: {e.args[0]}"
        return ToolResult(tool_name=tool_name, success=False, summary=message, error=message)
    except (ValueError, TypeError) as e:
        logger.warning(f"Tool {tool_name} rejected input: {e}")
        message = f"Invalid input for {tool_name}"
        return ToolResult(tool_name=tool_name, success=False, summary=message, error=str(e))

    return ToolResult(tool_name=tool_name, success=True, summary=summary, data=data)
