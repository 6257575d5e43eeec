import uuid
from sqlalchemy import (
    Column, String, Float, Integer, Boolean, DateTime, ForeignKey, JSON, Uuid, CheckConstraint
)
from sqlalchemy.orm import relationship
from app.db.database import Base, utcNow


class Ride(Base):
    """
    A trip offered by a driver.

    total_seats is fixed at creation. available_seats is only ever changed
    by the conditional decrement in app.db.seatBooking; the CHECK
    constraints below are the storage-level guard the booking relies on.
    """
    __tablename__ = "rides"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    driver_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    # {"name": ..., "lat": ..., "lng": ...} as picked on the map
    pickup = Column(JSON, nullable=False)
    dropoff = Column(JSON, nullable=False)
    pickup_name = Column(String, nullable=False)  # searchable copy of pickup["name"]

    departure_time = Column(DateTime, nullable=False, index=True)  # UTC

    total_seats = Column(Integer, nullable=False)
    available_seats = Column(Integer, nullable=False)

    price = Column(Float, nullable=False, default=0)
    route = Column(String, nullable=False)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurring_days = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, nullable=False, default=utcNow)

    driver = relationship("User", lazy="joined")
    bookings = relationship("Booking", back_populates="ride", order_by="Booking.created_at")

    __table_args__ = (
        CheckConstraint("available_seats >= 0", name="ck_rides_available_seats_non_negative"),
        CheckConstraint("available_seats <= total_seats", name="ck_rides_available_within_total"),
    )
