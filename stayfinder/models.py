import datetime
import uuid

from sqlalchemy import Column, String, Integer, Float, Text, Date, TIMESTAMP, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from .database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


# --- User Model ---
class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String, nullable=True)
    email = Column(String, unique=True, index=True, nullable=True)
    created_at = Column(TIMESTAMP, default=_utcnow)

    listings = relationship("Listing", back_populates="user")
    reservations = relationship("Reservation", back_populates="user")


# --- Listing Model ---
class Listing(Base):
    __tablename__ = "listings"

    id = Column(String(32), primary_key=True, default=_new_id)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    image_src = Column(String, nullable=False)
    category = Column(String, index=True, nullable=False)

    room_count = Column(Integer, nullable=False)
    bathroom_count = Column(Integer, nullable=False)
    guest_count = Column(Integer, nullable=False)

    country = Column(String, index=True, nullable=True)
    region = Column(String, nullable=True)
    latlng = Column(JSON, nullable=True)

    # Smallest currency unit. Float storage so an unparseable price is kept as NaN.
    price = Column(Float, nullable=True)

    user_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(TIMESTAMP, default=_utcnow, nullable=False)

    user = relationship("User", back_populates="listings")
    reservations = relationship("Reservation", back_populates="listing")

    __table_args__ = (
        Index("ix_listings_created_at", "created_at"),
    )


# --- Reservation Model ---
class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(String(32), primary_key=True, default=_new_id)

    listing_id = Column(String(32), ForeignKey("listings.id"), index=True, nullable=False)
    user_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_price = Column(Integer, nullable=True)

    created_at = Column(TIMESTAMP, default=_utcnow, nullable=False)

    listing = relationship("Listing", back_populates="reservations")
    user = relationship("User", back_populates="reservations")
