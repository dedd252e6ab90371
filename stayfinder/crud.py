from typing import Any, Dict, List, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy.sql.elements import ColumnElement

from . import models
from .exceptions import RetrievalFailure



def find_page(
        db: Session,
        model,
        where: ColumnElement,
        limit: int,
        cursor: Optional[str] = None,
        skip: int = 0,
        options: tuple = (),
) -> List[Any]:
    """
    Returns up to `limit` rows of `model` matching `where`, newest first.

    When `cursor` is given, retrieval starts AT the row with that id
    (inclusive) in (created_at desc, id desc) order; `skip` drops rows from
    the front of that window. An unknown cursor yields an empty list.
    Any database error is raised as RetrievalFailure.
    """
    try:
        stmt = select(model).where(where)

        if cursor:
            anchor = db.get(model, cursor)
            if anchor is None:
                return []
            stmt = stmt.where(
                or_(
                    model.created_at < anchor.created_at,
                    and_(model.created_at == anchor.created_at, model.id <= anchor.id),
                )
            )

        stmt = (
            stmt.options(*options)
            .order_by(model.created_at.desc(), model.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(db.execute(stmt).scalars().unique().all())
    except SQLAlchemyError as e:
        raise RetrievalFailure(f"Failed to query {model.__tablename__}: {e}") from e


def find_listings(db: Session, where: ColumnElement, limit: int, cursor: Optional[str] = None, skip: int = 0):
    return find_page(db, models.Listing, where, limit, cursor=cursor, skip=skip)


def find_reservations(db: Session, where: ColumnElement, limit: int, cursor: Optional[str] = None, skip: int = 0):
    return find_page(
        db,
        models.Reservation,
        where,
        limit,
        cursor=cursor,
        skip=skip,
        options=(joinedload(models.Reservation.listing),),
    )


def get_listing_with_details(db: Session, listing_id: str) -> Optional[models.Listing]:
    """
    Loads one listing with its owner and its reservations' date ranges.
    Only start_date and end_date of each reservation are loaded.
    """
    stmt = (
        select(models.Listing)
        .where(models.Listing.id == listing_id)
        .options(
            joinedload(models.Listing.user),
            selectinload(models.Listing.reservations).load_only(
                models.Reservation.start_date,
                models.Reservation.end_date,
            ),
        )
    )
    return db.execute(stmt).scalars().first()


def create_listing(db: Session, values: Dict[str, Any]) -> models.Listing:
    db_listing = models.Listing(**values)
    db.add(db_listing)
    db.commit()
    # Pick up the store-assigned id and created_at
    db.refresh(db_listing)
    return db_listing
