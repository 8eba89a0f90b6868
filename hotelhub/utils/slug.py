
import re
import uuid
from sqlalchemy.orm import Session
from hotelhub.models.hotel import Hotel


def generate_slug(text: str) -> str:
    """Convert text to a URL-safe slug: lowercase, hyphens, no special chars."""
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"-+", "-", slug).strip("-")
    return slug or "hotel"


def slug_taken(db: Session, slug: str) -> bool:
    return db.query(Hotel.id).filter(Hotel.slug == slug).first() is not None


def make_unique_slug(db: Session, name: str) -> str:
    """Generate a unique hotel slug, appending a short random suffix on collision."""
    base_slug = generate_slug(name)
    slug = base_slug
    while slug_taken(db, slug):
        slug = f"{base_slug}-{uuid.uuid4().hex[:6]}"
    return slug
