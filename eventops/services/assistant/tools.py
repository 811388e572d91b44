# eventops/services/assistant/tools.py
"""
Tool definitions exposed to the assistant model.

Each tool carries a JSON-schema input, a category and whether it changes
data. Tools that change data are never run straight from a model turn;
they come back to the user as pending actions first.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

EVENT_TYPES = [
    "conference", "hackathon", "workshop", "meetup", "corporate",
    "webinar", "concert", "exhibition", "other",
]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: Dict[str, Any]
    category: str
    requires_confirmation: bool = False
    required: List[str] = field(default_factory=list)

    def to_anthropic(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": {
                "type": "object",
                "properties": self.input_schema,
                "required": self.required,
            },
        }


AGENT_TOOLS: List[ToolDefinition] = [
    # ---- events ----
    ToolDefinition(
        name="create_event",
        description=(
            "Create a new event with the provided details. Use this when you have "
            "gathered enough information from the user to create an event."
        ),
        input_schema={
            "title": {"type": "string", "description": "The name/title of the event"},
            "description": {"type": "string", "description": "A detailed description of the event"},
            "event_type": {"type": "string", "description": "The type of event", "enum": EVENT_TYPES},
            "start_date": {"type": "string", "description": "Start date in YYYY-MM-DD format"},
            "start_time": {"type": "string", "description": "Start time in HH:MM format (24-hour)"},
            "end_date": {"type": "string", "description": "End date in YYYY-MM-DD format"},
            "end_time": {"type": "string", "description": "End time in HH:MM format (24-hour)"},
            "location": {"type": "string", "description": "Venue name and address, or the virtual platform"},
            "expected_attendees": {"type": "integer", "description": "Expected number of attendees"},
            "budget": {"type": "number", "description": "Total budget for the event in USD"},
        },
        required=["title", "event_type", "start_date"],
        category="events",
        requires_confirmation=True,
    ),
    ToolDefinition(
        name="update_event",
        description="Update an existing event with new details",
        input_schema={
            "event_id": {"type": "string", "description": "The ID of the event to update"},
            "title": {"type": "string", "description": "New title for the event"},
            "description": {"type": "string", "description": "New description"},
            "status": {
                "type": "string",
                "description": "New status",
                "enum": ["draft", "planning", "active", "completed", "cancelled"],
            },
            "start_date": {"type": "string", "description": "New start date (YYYY-MM-DD)"},
            "start_time": {"type": "string", "description": "New start time (HH:MM)"},
            "location": {"type": "string", "description": "New location"},
            "expected_attendees": {"type": "integer", "description": "Updated attendee count"},
            "budget": {"type": "number", "description": "Updated budget in USD"},
        },
        required=["event_id"],
        category="events",
        requires_confirmation=True,
    ),
    ToolDefinition(
        name="get_event_details",
        description="Get details about a specific event",
        input_schema={
            "event_id": {"type": "string", "description": "The ID of the event to retrieve"},
        },
        required=["event_id"],
        category="events",
    ),
    ToolDefinition(
        name="get_upcoming_events",
        description="Get the user's upcoming events",
        input_schema={
            "limit": {"type": "integer", "description": "Maximum number of events to return (default: 5)"},
            "status": {
                "type": "string",
                "description": "Filter by event status",
                "enum": ["draft", "planning", "active", "completed"],
            },
        },
        category="events",
    ),
    # ---- vendors ----
    ToolDefinition(
        name="search_vendors",
        description=(
            "Search for vendors that match specific criteria. Use this to find catering, "
            "AV, photography, and other service providers for events."
        ),
        input_schema={
            "category": {"type": "string", "description": "The type of vendor to search for"},
            "location": {"type": "string", "description": "Location to search in (city or region)"},
            "min_rating": {"type": "number", "description": "Minimum rating (1-5)"},
            "limit": {"type": "integer", "description": "Maximum number of results (default: 5)"},
        },
        category="vendors",
    ),
    ToolDefinition(
        name="add_vendor_to_event",
        description="Add a vendor to an event and create an inquiry",
        input_schema={
            "event_id": {"type": "string", "description": "The ID of the event"},
            "vendor_id": {"type": "string", "description": "The ID of the vendor to add"},
            "proposed_budget": {"type": "number", "description": "Proposed budget for this vendor in USD"},
            "notes": {"type": "string", "description": "Notes or special requests for the vendor"},
        },
        required=["event_id", "vendor_id"],
        category="vendors",
        requires_confirmation=True,
    ),
    # ---- sponsors ----
    ToolDefinition(
        name="search_sponsors",
        description=(
            "Search for potential sponsors that match event criteria. Use this to find "
            "companies interested in sponsoring events."
        ),
        input_schema={
            "industry": {"type": "string", "description": "Industry to search in"},
            "min_budget": {"type": "number", "description": "Minimum sponsorship budget in USD"},
            "max_budget": {"type": "number", "description": "Maximum sponsorship budget in USD"},
            "tier": {
                "type": "string",
                "description": "Sponsorship tier level",
                "enum": ["platinum", "gold", "silver", "bronze"],
            },
            "limit": {"type": "integer", "description": "Maximum number of results (default: 5)"},
        },
        category="sponsors",
    ),
    ToolDefinition(
        name="add_sponsor_to_event",
        description="Add a sponsor to an event and create a sponsorship inquiry",
        input_schema={
            "event_id": {"type": "string", "description": "The ID of the event"},
            "sponsor_id": {"type": "string", "description": "The ID of the sponsor to add"},
            "tier": {
                "type": "string",
                "description": "Proposed sponsorship tier",
                "enum": ["platinum", "gold", "silver", "bronze"],
            },
            "proposed_amount": {"type": "number", "description": "Proposed sponsorship amount in USD"},
        },
        required=["event_id", "sponsor_id"],
        category="sponsors",
        requires_confirmation=True,
    ),
    # ---- tasks ----
    ToolDefinition(
        name="create_task",
        description="Add a planning task to an event's checklist",
        input_schema={
            "event_id": {"type": "string", "description": "The ID of the event"},
            "title": {"type": "string", "description": "What needs to be done"},
            "description": {"type": "string", "description": "Extra detail for the task"},
            "category": {"type": "string", "description": "Task category, e.g. venue, vendors, marketing"},
            "priority": {
                "type": "string",
                "description": "Task priority",
                "enum": ["low", "medium", "high", "urgent"],
            },
            "due_date": {"type": "string", "description": "Due date in YYYY-MM-DD format"},
        },
        required=["event_id", "title"],
        category="tasks",
        requires_confirmation=True,
    ),
    # ---- profile ----
    ToolDefinition(
        name="get_user_profile",
        description="Get the current user's profile to personalize recommendations",
        input_schema={},
        category="profile",
    ),
]

_TOOLS_BY_NAME = {tool.name: tool for tool in AGENT_TOOLS}


def get_anthropic_tools() -> List[Dict[str, Any]]:
    return [tool.to_anthropic() for tool in AGENT_TOOLS]


def get_tool(name: str) -> Optional[ToolDefinition]:
    return _TOOLS_BY_NAME.get(name)


def tool_requires_confirmation(name: str) -> bool:
    tool = get_tool(name)
    return tool.requires_confirmation if tool else False
