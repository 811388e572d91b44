# eventops/crud/crud_sponsor.py
"""
CRUD operations for sponsor management.
"""

from .crud_catalog import CRUDCatalog, CRUDEventLink
from eventops.models.sponsor import Sponsor, EventSponsor
from eventops.schemas.sponsor import SponsorCreate


class CRUDSponsor(CRUDCatalog[Sponsor, SponsorCreate, SponsorCreate]):
    facet_field = "industry"


sponsor = CRUDSponsor(Sponsor)
event_sponsor = CRUDEventLink(EventSponsor, "sponsor_id")
