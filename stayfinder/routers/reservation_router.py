from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import get_current_user
from ..database import get_db
from ..services import reservation_service

router = APIRouter(prefix="/reservations", tags=["Reservations"])

RESERVATION_QUERY_KEYS = ("listingId", "userId", "authorId", "cursor")


@router.get("/", response_model=schemas.ReservationPage)
def read_reservations(request: Request, db: Session = Depends(get_db)):
    """
    Reservations with their listings. This is also what the page's
    "load more" trigger calls with its fn_args plus the next cursor.
    """
    query: Dict[str, Any] = {
        key: request.query_params.get(key)
        for key in RESERVATION_QUERY_KEYS
        if key in request.query_params
    }
    return reservation_service.get_reservations(db, query)


@router.get("/page", response_model=schemas.ReservationsPageView, response_model_exclude_none=True)
def reservations_page(
        current_user: Annotated[Optional[models.User], Depends(get_current_user)],
        userId: Optional[str] = None,
        db: Session = Depends(get_db),
):
    return reservation_service.render_reservations_page(db, current_user, user_id=userId)
