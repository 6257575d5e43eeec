from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import getCurrentUserId
from app.db.database import getDb
from app.db.seatBooking import bookSeat
from app.schemas.booking import BookingResponse, BookSeatResponse

router = APIRouter(prefix="/api/rides", tags=["Booking"])


@router.post("/{rideId}/book", response_model=BookSeatResponse)
def bookRide(rideId: str, userId: str = Depends(getCurrentUserId), db: Session = Depends(getDb)):
    """
    Take one seat on a ride.

    404 unknown ride, 400 own ride, 409 already booked or full.
    """
    booking = bookSeat(db, rideId, userId)
    return BookSeatResponse(
        message="Ride booked successfully",
        booking=BookingResponse(
            id=str(booking.id),
            rideId=str(booking.ride_id),
            passengerId=str(booking.passenger_id),
            status=booking.status
        )
    )
