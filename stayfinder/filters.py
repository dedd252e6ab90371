"""
Predicate builders for listing and reservation searches.

Each builder appends SQLAlchemy clauses to an ordered list, only for the
filter values that are truthy, and combines them with AND. Whether any
clause was added matters to the caller: it decides if a pagination cursor
row can be skipped.
"""
import datetime
from typing import List, Optional

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from . import models, schemas


class QueryBuilder:
    def __init__(self):
        self.clauses: List[ColumnElement] = []

    def where(self, clause: ColumnElement) -> "QueryBuilder":
        self.clauses.append(clause)
        return self

    def equals(self, column, value) -> "QueryBuilder":
        if value:
            self.where(column == value)
        return self

    def at_least(self, column, value) -> "QueryBuilder":
        # Inclusive lower bound
        if value:
            self.where(column >= float(value))
        return self

    @property
    def active(self) -> bool:
        return bool(self.clauses)

    def build(self) -> ColumnElement:
        if not self.clauses:
            return true()
        return and_(*self.clauses)


class ListingQueryBuilder(QueryBuilder):

    def not_reserved_between(
            self,
            start_date: Optional[datetime.date],
            end_date: Optional[datetime.date],
    ) -> "ListingQueryBuilder":
        """
        Excludes listings with a reservation that starts or ends inside
        [start_date, end_date]. A reservation that strictly contains the
        range is not caught by this test.
        """
        if not (start_date and end_date):
            return self

        reservation = models.Reservation
        overlapping = or_(
            and_(reservation.start_date >= start_date, reservation.start_date <= end_date),
            and_(reservation.end_date >= start_date, reservation.end_date <= end_date),
        )
        self.where(~models.Listing.reservations.any(overlapping))
        return self


def listing_clauses(listing_filter: schemas.ListingFilter) -> ListingQueryBuilder:
    listing = models.Listing
    builder = ListingQueryBuilder()
    (
        builder
        .equals(listing.user_id, listing_filter.user_id)
        .equals(listing.category, listing_filter.category)
        .at_least(listing.room_count, listing_filter.room_count)
        .at_least(listing.guest_count, listing_filter.guest_count)
        .at_least(listing.bathroom_count, listing_filter.bathroom_count)
        .equals(listing.country, listing_filter.country)
        .not_reserved_between(listing_filter.start_date, listing_filter.end_date)
    )
    return builder


def reservation_clauses(reservation_filter: schemas.ReservationFilter) -> QueryBuilder:
    reservation = models.Reservation
    builder = QueryBuilder()
    builder.equals(reservation.listing_id, reservation_filter.listing_id)
    builder.equals(reservation.user_id, reservation_filter.user_id)
    if reservation_filter.author_id:
        builder.where(reservation.listing.has(models.Listing.user_id == reservation_filter.author_id))
    return builder
