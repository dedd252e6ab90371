"""
Listing search, detail and creation.

Read paths fail soft: any error while searching is logged and reported as
an empty page. The creation path fails fast with InvalidInput or
Unauthorized.
"""
import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from sqlalchemy.orm import Session

from .. import crud, models, schemas
from ..config import settings
from ..exceptions import InvalidInput, Unauthorized
from ..filters import listing_clauses

logger = logging.getLogger("stayfinder.listings")

EMPTY_PAGE = {"listings": [], "next_cursor": None}

# Field -> must be truthy. Keys missing from this table are also required
# to be truthy, so a legitimate 0 count is rejected like an empty one.
LISTING_FIELD_RULES: Dict[str, bool] = {
    "category": True,
    "location": True,
    "guestCount": True,
    "bathroomCount": True,
    "roomCount": True,
    "image": True,
    "price": True,
    "title": True,
    "description": True,
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _as_listing_filter(query) -> schemas.ListingFilter:
    if query is None:
        return schemas.ListingFilter()
    if isinstance(query, schemas.ListingFilter):
        return query
    return schemas.ListingFilter.model_validate(dict(query))


def get_listings(db: Session, query: Optional[Union[Mapping, schemas.ListingFilter]] = None) -> Dict[str, Any]:
    """
    Returns {"listings": [...], "next_cursor": str | None}.

    The cursor row itself is skipped only when no filter clause is active:
    under filters the cursor row may not match and must not cost a result.
    next_cursor is set whenever the page came back full.
    """
    try:
        listing_filter = _as_listing_filter(query)
        builder = listing_clauses(listing_filter)
        batch = settings.LISTINGS_BATCH

        skip = 1 if listing_filter.cursor and not builder.active else 0

        listings = crud.find_listings(
            db,
            builder.build(),
            limit=batch,
            cursor=listing_filter.cursor,
            skip=skip,
        )

        next_cursor = listings[batch - 1].id if len(listings) == batch else None
        return {"listings": listings, "next_cursor": next_cursor}
    except Exception as e:
        logger.error(f"Failed to retrieve listings: {e}")
        return dict(EMPTY_PAGE)


def get_listing_by_id(db: Session, listing_id: str) -> Optional[models.Listing]:
    if not listing_id:
        return None
    return crud.get_listing_with_details(db, listing_id)


def parse_price(value: Any) -> Union[int, float]:
    """
    Base-10 integer parse of the leading digits, ignoring trailing text.
    Returns NaN when there are no leading digits.
    """
    if isinstance(value, bool):
        return float("nan")
    if isinstance(value, (int, float)):
        value = repr(value) if isinstance(value, float) else str(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return float("nan")
    return int(match.group(1))


def validate_listing_data(data: Mapping) -> None:
    for field, required in LISTING_FIELD_RULES.items():
        if required and field not in data:
            raise InvalidInput(field)

    for field, value in data.items():
        if LISTING_FIELD_RULES.get(field, True) and not value:
            raise InvalidInput(field)


def _as_count(data: Mapping, field: str) -> int:
    try:
        return int(data[field])
    except (TypeError, ValueError):
        raise InvalidInput(field)


def create_listing(db: Session, data: Mapping, current_user: Optional[models.User]) -> models.Listing:
    """
    Creates a listing owned by `current_user`.

    Raises InvalidInput when any field of `data` is falsy and Unauthorized
    when there is no current user. The owner always comes from
    `current_user`, never from `data`.
    """
    try:
        validate_listing_data(data)
    except InvalidInput as e:
        logger.info(f"Rejected listing data: {e}")
        raise

    location = data["location"]
    if not isinstance(location, Mapping):
        raise InvalidInput("location")

    if current_user is None:
        logger.warning("Rejected listing creation without a current user")
        raise Unauthorized()

    values = {
        "title": data["title"],
        "description": data["description"],
        "image_src": data["image"],
        "category": data["category"],
        "room_count": _as_count(data, "roomCount"),
        "bathroom_count": _as_count(data, "bathroomCount"),
        "guest_count": _as_count(data, "guestCount"),
        "country": location.get("label"),
        "region": location.get("region"),
        "latlng": location.get("latlng"),
        "price": parse_price(data["price"]),
        "user_id": current_user.id,
    }

    listing = crud.create_listing(db, values)
    logger.info(f"User {current_user.id} created listing {listing.id}")
    return listing
