import uuid
from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.database import Base, utcNow


BOOKING_CONFIRMED = "confirmed"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    ride_id = Column(Uuid, ForeignKey("rides.id"), nullable=False)
    passenger_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default=BOOKING_CONFIRMED)
    created_at = Column(DateTime, nullable=False, default=utcNow)

    ride = relationship("Ride", back_populates="bookings")
    passenger = relationship("User")

    # One booking per passenger per ride
    __table_args__ = (
        UniqueConstraint("ride_id", "passenger_id", name="unique_ride_passenger_booking"),
    )
