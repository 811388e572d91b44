# eventops/crud/crud_vendor.py
from .crud_catalog import CRUDCatalog, CRUDEventLink
from eventops.models.vendor import Vendor, EventVendor
from eventops.schemas.vendor import VendorCreate


class CRUDVendor(CRUDCatalog[Vendor, VendorCreate, VendorCreate]):
    facet_field = "category"


vendor = CRUDVendor(Vendor)
event_vendor = CRUDEventLink(EventVendor, "vendor_id")
