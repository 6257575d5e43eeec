from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import getCurrentUserId
from app.db.database import getDb
from app.db.rideUtils import (
    createRide,
    getBookedRides,
    getOfferedRides,
    listAvailableRides,
    safeParseLocation,
    searchRides,
)
from app.models.ride import Ride
from app.schemas.ride import (
    BookedRideResponse,
    OfferedRideBooking,
    OfferedRideResponse,
    RideCreateRequest,
    RideCreateResponse,
    RideHistoryResponse,
    RideListResponse,
    RideResponse,
    RideSearchRequest,
)

router = APIRouter(prefix="/api/rides", tags=["Ride"])

AVATAR_PLACEHOLDER = "/placeholder.svg?height=48&width=48"


def toRideResponse(ride: Ride) -> RideResponse:
    driver = ride.driver
    return RideResponse(
        id=str(ride.id),
        driverId=str(ride.driver_id),
        driverName=(driver.name if driver else None) or "Unknown Driver",
        driverAvatar=(driver.avatar if driver else None) or AVATAR_PLACEHOLDER,
        rating=(driver.rating if driver else None) or 5.0,
        totalRides=(driver.total_rides if driver else None) or 0,
        pickup=safeParseLocation(ride.pickup),
        dropoff=safeParseLocation(ride.dropoff),
        departureTime=ride.departure_time,
        availableSeats=ride.available_seats,
        totalSeats=ride.total_seats,
        price=ride.price or 0,
        verified=bool(driver.is_verified) if driver else False,
        route=ride.route,
        isRecurring=ride.is_recurring,
        recurringDays=ride.recurring_days or [],
        createdAt=ride.created_at
    )


def toRideList(rides) -> RideListResponse:
    formatted = [toRideResponse(r) for r in rides]
    return RideListResponse(rides=formatted, total=len(formatted))


@router.post("/create", response_model=RideCreateResponse)
def create(request: RideCreateRequest, userId: str = Depends(getCurrentUserId), db: Session = Depends(getDb)):
    """
    Offer a ride. All seats start available; departure is read as UTC.
    """
    ride = createRide(
        db,
        driverId=userId,
        pickup=request.pickup,
        dropoff=request.dropoff,
        departureTime=request.departureTime,
        rideDate=request.rideDate,
        availableSeats=request.availableSeats,
        isRecurring=request.isRecurring,
        recurringDays=request.recurringDays
    )
    return RideCreateResponse(message="Ride created successfully", ride=toRideResponse(ride))


@router.get("/search", response_model=RideListResponse)
def listRides(db: Session = Depends(getDb)):
    """Every upcoming ride with a free seat"""
    return toRideList(listAvailableRides(db))


@router.post("/search", response_model=RideListResponse)
def search(request: RideSearchRequest, db: Session = Depends(getDb)):
    pickupName = request.pickup.get("name") if request.pickup else None
    rides = searchRides(db, pickupName=pickupName, date=request.date, time=request.time)
    return toRideList(rides)


@router.get("/history", response_model=RideHistoryResponse)
def history(userId: str = Depends(getCurrentUserId), db: Session = Depends(getDb)):
    """Rides the caller drives and rides the caller has booked, newest first."""
    offered = [
        OfferedRideResponse(
            id=str(ride.id),
            pickup=safeParseLocation(ride.pickup),
            dropoff=safeParseLocation(ride.dropoff),
            departureTime=ride.departure_time,
            availableSeats=ride.available_seats,
            totalSeats=ride.total_seats,
            price=ride.price or 0,
            route=ride.route,
            isRecurring=ride.is_recurring,
            recurringDays=ride.recurring_days or [],
            createdAt=ride.created_at,
            bookings=[
                OfferedRideBooking(
                    id=str(b.id),
                    passengerId=str(b.passenger_id),
                    passengerName=(b.passenger.name if b.passenger else None) or "Unknown",
                    passengerAvatar=(b.passenger.avatar if b.passenger else None) or "/placeholder.svg",
                    status=b.status,
                    bookedAt=b.created_at
                )
                for b in ride.bookings
            ]
        )
        for ride in getOfferedRides(db, userId)
    ]

    booked = [
        BookedRideResponse(
            bookingId=str(b.id),
            status=b.status,
            bookedAt=b.created_at,
            ride=toRideResponse(b.ride)
        )
        for b in getBookedRides(db, userId)
    ]

    return RideHistoryResponse(offeredRides=offered, bookedRides=booked)
