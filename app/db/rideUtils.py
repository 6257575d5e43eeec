import uuid
from datetime import datetime, timedelta

from loguru import logger
from sqlalchemy.orm import Session, joinedload

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.db.database import toUuid, utcNow
from app.models.ride import Ride
from app.models.booking import Booking


UNKNOWN_LOCATION = {"name": "Unknown"}


def safeParseLocation(value) -> dict:
    """Locations must at least carry a name; anything else reads as Unknown."""
    if isinstance(value, dict) and value.get("name"):
        return value
    return dict(UNKNOWN_LOCATION)


def parseDeparture(rideDate: str, departureTime: str) -> datetime:
    try:
        return datetime.strptime(f"{rideDate}T{departureTime}", "%Y-%m-%dT%H:%M")
    except (ValueError, TypeError):
        raise ValidationError("Invalid date or time format (expected YYYY-MM-DD and HH:MM)")


def buildRouteName(pickup: dict, dropoff: dict) -> str:
    return f"{pickup['name'].split(',')[0]} → {dropoff['name'].split(',')[0]}"


def createRide(
    db: Session,
    driverId,
    pickup,
    dropoff,
    departureTime,
    rideDate,
    availableSeats,
    isRecurring=False,
    recurringDays=None,
) -> Ride:
    if not pickup or not dropoff or not departureTime or not rideDate or not availableSeats:
        raise ValidationError("Missing required fields")

    if not isinstance(pickup, dict) or not pickup.get("name") \
            or not isinstance(dropoff, dict) or not dropoff.get("name"):
        raise ValidationError("Missing required fields")

    if availableSeats < 1 or availableSeats > settings.MAX_SEATS_PER_RIDE:
        raise ValidationError(f"Available seats must be between 1 and {settings.MAX_SEATS_PER_RIDE}")

    departure = parseDeparture(rideDate, departureTime)
    if departure <= utcNow().replace(second=0, microsecond=0):
        raise ValidationError("Cannot create rides for past dates/times")

    try:
        ride = Ride(
            id=uuid.uuid4(),
            driver_id=toUuid(driverId),
            pickup=pickup,
            dropoff=dropoff,
            pickup_name=pickup["name"],
            departure_time=departure,
            total_seats=availableSeats,
            available_seats=availableSeats,
            price=0,
            route=buildRouteName(pickup, dropoff),
            is_recurring=bool(isRecurring),
            recurring_days=list(recurringDays or []),
        )
        db.add(ride)
        db.commit()
        db.refresh(ride)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Ride {ride.id} created by {ride.driver_id}: {ride.route} at {ride.departure_time} ({ride.total_seats} seats)")
    return ride


def _openRidesQuery(db: Session):
    return (
        db.query(Ride)
        .options(joinedload(Ride.driver))
        .filter(Ride.available_seats > 0)
    )


def listAvailableRides(db: Session):
    """All future rides that still have a seat, soonest first."""
    return (
        _openRidesQuery(db)
        .filter(Ride.departure_time > utcNow())
        .order_by(Ride.departure_time.asc())
        .all()
    )


def searchRides(db: Session, pickupName=None, date=None, time=None):
    """
    Filter open rides.

    - date + time: departures within +/- SEARCH_WINDOW_MINUTES of that moment
    - date only:   any departure on that (UTC) day
    - neither:     any future departure
    - pickupName:  case-insensitive substring of the pickup name
    """
    query = _openRidesQuery(db)

    if date and time:
        target = parseDeparture(date, time)
        window = timedelta(minutes=settings.SEARCH_WINDOW_MINUTES)
        query = query.filter(
            Ride.departure_time >= target - window,
            Ride.departure_time <= target + window,
        )
    elif date:
        try:
            startOfDay = datetime.strptime(date, "%Y-%m-%d")
        except (ValueError, TypeError):
            raise ValidationError("Invalid date format (expected YYYY-MM-DD)")
        query = query.filter(
            Ride.departure_time >= startOfDay,
            Ride.departure_time < startOfDay + timedelta(days=1),
        )
    else:
        query = query.filter(Ride.departure_time > utcNow())

    if pickupName:
        query = query.filter(Ride.pickup_name.ilike(f"%{pickupName}%"))

    return query.order_by(Ride.departure_time.asc()).all()


def getOfferedRides(db: Session, driverId):
    return (
        db.query(Ride)
        .options(joinedload(Ride.bookings).joinedload(Booking.passenger))
        .filter(Ride.driver_id == toUuid(driverId))
        .order_by(Ride.created_at.desc())
        .all()
    )


def getBookedRides(db: Session, passengerId):
    return (
        db.query(Booking)
        .options(joinedload(Booking.ride).joinedload(Ride.driver))
        .filter(Booking.passenger_id == toUuid(passengerId))
        .order_by(Booking.created_at.desc())
        .all()
    )
