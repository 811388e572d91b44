# eventops/models/__init__.py
# Import all models to ensure SQLAlchemy can resolve relationships
# Order matters for dependencies - import base models first

from eventops.db.base_class import Base
from eventops.models.user import User
from eventops.models.organization import (
    Organization,
    OrganizationMember,
    OrganizationInvitation,
)
from eventops.models.event import Event
from eventops.models.event_task import EventTask
from eventops.models.budget_item import BudgetItem
from eventops.models.event_note import EventNote
from eventops.models.attendee import Attendee

# Promo codes
from eventops.models.promo_code import PromoCode
from eventops.models.promo_code_usage import PromoCodeUsage

# Marketplace
from eventops.models.sponsor import Sponsor, EventSponsor
from eventops.models.vendor import Vendor, EventVendor

# Admin / auth bookkeeping
from eventops.models.moderation_log import ModerationLog
from eventops.models.failed_login_attempt import FailedLoginAttempt
from eventops.models.ai_conversation import AIConversation

__all__ = [
    "Base",
    "User",
    "Organization",
    "OrganizationMember",
    "OrganizationInvitation",
    "Event",
    "EventTask",
    "BudgetItem",
    "EventNote",
    "Attendee",
    "PromoCode",
    "PromoCodeUsage",
    "Sponsor",
    "EventSponsor",
    "Vendor",
    "EventVendor",
    "ModerationLog",
    "FailedLoginAttempt",
    "AIConversation",
]
