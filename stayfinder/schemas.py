import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

_DATETIME = TypeAdapter(datetime.datetime)


# --- Query filters ---

class ListingFilter(BaseModel):
    """
    Optional filters for a listing search.

    Keys may arrive in their camelCase query-string form (``roomCount``) or
    in snake_case. A falsy value is treated exactly like an absent one, so a
    count of ``0`` does not filter anything.
    """
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")
    category: Optional[str] = None
    room_count: Optional[float] = Field(None, alias="roomCount")
    guest_count: Optional[float] = Field(None, alias="guestCount")
    bathroom_count: Optional[float] = Field(None, alias="bathroomCount")
    country: Optional[str] = None
    start_date: Optional[datetime.date] = Field(None, alias="startDate")
    end_date: Optional[datetime.date] = Field(None, alias="endDate")
    cursor: Optional[str] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def keep_date_part(cls, value):
        # Clients send full timestamps ("2024-06-05T10:00:00.000Z"); only the day is compared
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, str) and ("T" in value or " " in value.strip()):
            return _DATETIME.validate_python(value.strip()).date()
        return value


class ReservationFilter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    listing_id: Optional[str] = Field(None, alias="listingId")
    user_id: Optional[str] = Field(None, alias="userId")
    # Owner of the reserved listing
    author_id: Optional[str] = Field(None, alias="authorId")
    cursor: Optional[str] = None


# --- Read models ---

class UserRead(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ReservationDates(BaseModel):
    start_date: datetime.date
    end_date: datetime.date

    model_config = ConfigDict(from_attributes=True)


class ReservationRead(ReservationDates):
    id: str
    listing_id: str
    user_id: str
    total_price: Optional[int] = None
    created_at: datetime.datetime


class ListingRead(BaseModel):
    id: str
    title: str
    description: str
    image_src: str
    category: str
    room_count: int
    bathroom_count: int
    guest_count: int
    country: Optional[str] = None
    region: Optional[str] = None
    latlng: Optional[List[float]] = None
    price: Optional[float] = None
    user_id: str
    created_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


class ListingDetail(ListingRead):
    user: UserRead
    reservations: List[ReservationDates] = []


class ReservedListing(ListingRead):
    reservation: ReservationRead


# --- Pages ---

class ListingPage(BaseModel):
    listings: List[ListingRead]
    next_cursor: Optional[str] = None


class ReservationPage(BaseModel):
    listings: List[ReservedListing]
    next_cursor: Optional[str] = None


class EmptyState(BaseModel):
    title: str
    subtitle: str


class Heading(BaseModel):
    title: str
    subtitle: str
    back_btn: bool = False


class LoadMore(BaseModel):
    next_cursor: str
    fn_args: dict
    query_key: List[str]


class ReservationsPageView(BaseModel):
    empty_state: Optional[EmptyState] = None
    heading: Optional[Heading] = None
    listings: List[ReservedListing] = []
    load_more: Optional[LoadMore] = None
