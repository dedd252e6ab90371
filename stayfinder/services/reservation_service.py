import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from sqlalchemy.orm import Session

from .. import crud, models, schemas
from ..config import settings
from ..filters import reservation_clauses

logger = logging.getLogger("stayfinder.reservations")


def _as_reservation_filter(query) -> schemas.ReservationFilter:
    if query is None:
        return schemas.ReservationFilter()
    if isinstance(query, schemas.ReservationFilter):
        return query
    return schemas.ReservationFilter.model_validate(dict(query))


def _with_reservation(reservation: models.Reservation) -> schemas.ReservedListing:
    listing = schemas.ListingRead.model_validate(reservation.listing)
    return schemas.ReservedListing(
        **listing.model_dump(),
        reservation=schemas.ReservationRead.model_validate(reservation),
    )


def get_reservations(
        db: Session,
        query: Optional[Union[Mapping, schemas.ReservationFilter]] = None,
) -> Dict[str, Any]:
    """
    Returns {"listings": [...], "next_cursor": ...} where each item is the
    reserved listing with its reservation attached. Same cursor rules as
    the listing search; the cursor is a reservation id.
    """
    try:
        reservation_filter = _as_reservation_filter(query)
        builder = reservation_clauses(reservation_filter)
        batch = settings.LISTINGS_BATCH

        skip = 1 if reservation_filter.cursor and not builder.active else 0

        reservations = crud.find_reservations(
            db,
            builder.build(),
            limit=batch,
            cursor=reservation_filter.cursor,
            skip=skip,
        )

        next_cursor = reservations[batch - 1].id if len(reservations) == batch else None
        return {
            "listings": [_with_reservation(r) for r in reservations],
            "next_cursor": next_cursor,
        }
    except Exception as e:
        logger.error(f"Failed to retrieve reservations: {e}")
        return {"listings": [], "next_cursor": None}


def render_reservations_page(
        db: Session,
        current_user: Optional[models.User],
        user_id: Optional[str] = None,
) -> schemas.ReservationsPageView:
    """
    Builds the reservations page: bookings made on the properties of
    `user_id`, falling back to the current user. The first page is also
    queried by authorId (not userId), matching the load-more arguments.
    """
    user_id = user_id or (current_user.id if current_user else None)

    if not user_id:
        return schemas.ReservationsPageView(
            empty_state=schemas.EmptyState(title="Unauthorized", subtitle="Please login")
        )

    page = get_reservations(db, {"authorId": user_id})

    if not page["listings"]:
        return schemas.ReservationsPageView(
            empty_state=schemas.EmptyState(
                title="No reservations found",
                subtitle="Looks like you have no reservations on your properties.",
            )
        )

    load_more = None
    if page["next_cursor"]:
        load_more = schemas.LoadMore(
            next_cursor=page["next_cursor"],
            fn_args={"authorId": user_id},
            query_key=["reservations", user_id],
        )

    return schemas.ReservationsPageView(
        heading=schemas.Heading(title="Reservations", subtitle="Bookings on your properties", back_btn=True),
        listings=page["listings"],
        load_more=load_more,
    )
