# eventops/utils/slug.py
import re
import unicodedata
from sqlalchemy.orm import Session
from eventops.models.organization import Organization

MAX_SLUG_LENGTH = 50


def slugify(name: str) -> str:
    """Lower-case, ASCII-only, hyphen-separated form of a name."""
    # Transliterate unicode to ASCII (e.g., "Café" -> "Cafe")
    normalized = unicodedata.normalize("NFKD", name)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii")

    slug = ascii_text.lower().strip()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug[:MAX_SLUG_LENGTH].strip("-")


def generate_organization_slug(name: str, db: Session) -> str:
    """
    Generate a unique organization slug from its name.

    Collisions get a numeric suffix: "acme", "acme-1", "acme-2", ...
    """
    base_slug = slugify(name) or "organization"

    slug = base_slug
    suffix = 0
    while db.query(Organization.id).filter(Organization.slug == slug).first():
        suffix += 1
        slug = f"{base_slug}-{suffix}"

    return slug
