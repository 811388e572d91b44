# eventops/crud/__init__.py

from .crud_user import user
from .crud_event import event
from .crud_task import task
from .crud_budget_item import budget_item
from .crud_note import note
from .crud_attendee import attendee
from .crud_promo_code import promo_code
from .crud_sponsor import sponsor, event_sponsor
from .crud_vendor import vendor, event_vendor
from .crud_organization import organization
from .crud_moderation_log import moderation_log
from .crud_ai_conversation import ai_conversation
