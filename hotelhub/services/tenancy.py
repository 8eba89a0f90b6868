"""Host-name based tenant resolution for the platform, hotel and custom domains."""
from typing import Optional

from sqlalchemy.orm import Session

from hotelhub.core.config import settings
from hotelhub.models.hotel import Hotel, HotelStatus
from hotelhub.schemas.hotel import HostContext

_LOCAL_HOSTS = ("localhost", "127.0.0.1")


def resolve_host(db: Session, host: Optional[str]) -> HostContext:
    """
    Map a request Host header to the surface it addresses.

    admin.<platform>    -> platform console
    <slug>.<platform>   -> that hotel
    a hotel's domain    -> that hotel
    anything else       -> public portal
    """
    hostname = (host or "").split(":")[0].lower().strip(".")
    platform = settings.PLATFORM_DOMAIN.lower()

    if not hostname or hostname in _LOCAL_HOSTS:
        return HostContext(type="public")

    if hostname == platform or hostname == f"www.{platform}":
        return HostContext(type="public")

    if hostname.endswith(f".{platform}"):
        subdomain = hostname[: -len(platform) - 1]
        if subdomain == "admin":
            return HostContext(type="platform")
        if subdomain != "api" and "." not in subdomain:
            return HostContext(type="hotel", hotel_slug=subdomain)
        return HostContext(type="public")

    hotel = (
        db.query(Hotel)
        .filter(Hotel.domain == hostname, Hotel.status == HotelStatus.ACTIVE)
        .first()
    )
    if hotel:
        return HostContext(type="hotel", hotel_slug=hotel.slug)
    return HostContext(type="public")
