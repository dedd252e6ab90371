from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import get_current_user
from ..database import get_db
from ..exceptions import InvalidInput, Unauthorized
from ..services import listing_service

router = APIRouter(prefix="/listings", tags=["Listings"])

LISTING_QUERY_KEYS = (
    "userId",
    "category",
    "roomCount",
    "guestCount",
    "bathroomCount",
    "country",
    "startDate",
    "endDate",
    "cursor",
)


@router.get("/", response_model=schemas.ListingPage)
def read_listings(request: Request, db: Session = Depends(get_db)):
    """
    Search listings. Query parameters are passed through unparsed so that
    bad values produce an empty page rather than a validation error.
    """
    query: Dict[str, Any] = {
        key: request.query_params.get(key)
        for key in LISTING_QUERY_KEYS
        if key in request.query_params
    }
    return listing_service.get_listings(db, query)


@router.get("/{listing_id}", response_model=schemas.ListingDetail)
def read_listing(listing_id: str, db: Session = Depends(get_db)):
    db_listing = listing_service.get_listing_by_id(db, listing_id)
    if db_listing is None:
        raise HTTPException(status_code=404, detail="Listing not found")
    return db_listing


@router.post("/", response_model=schemas.ListingRead, status_code=status.HTTP_201_CREATED)
def create_listing(
        data: Annotated[Dict[str, Any], Body()],
        current_user: Annotated[Optional[models.User], Depends(get_current_user)],
        db: Session = Depends(get_db),
):
    """
    Create a listing owned by the authenticated user.
    """
    try:
        return listing_service.create_listing(db, data, current_user)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Unauthorized as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
