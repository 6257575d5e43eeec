import uuid

from loguru import logger
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, InvalidOperationError, NotFoundError
from app.db.database import toUuid
from app.models.ride import Ride
from app.models.booking import Booking, BOOKING_CONFIRMED
from app.models.user import User


ALREADY_BOOKED = "You have already booked this ride"
NO_SEATS = "No seats available"


def bookSeat(db: Session, rideId, passengerId) -> Booking:
    """
    Books ONE seat on a ride for a passenger.

    Checked in order:
    - ride exists                      -> NotFoundError
    - passenger is not the driver      -> InvalidOperationError
    - passenger has no booking yet     -> ConflictError
    - a seat is left at commit time    -> ConflictError
    - passenger account still exists   -> NotFoundError (on a foreign key failure)

    The booking insert and the seat decrement commit together or not at
    all. The decrement is conditional on available_seats > 0, so racing
    requests for the last seat cannot push the counter below zero.
    """
    rideUuid = toUuid(rideId)
    passengerUuid = toUuid(passengerId)

    # 1️⃣ Ride must exist
    ride = db.get(Ride, rideUuid) if rideUuid else None
    if ride is None:
        raise NotFoundError("Ride not found")

    # 2️⃣ Drivers cannot take a seat in their own car
    if ride.driver_id == passengerUuid:
        logger.warning(f"Driver {passengerUuid} tried to book own ride {rideUuid}")
        raise InvalidOperationError("Cannot book your own ride")

    # 3️⃣ One booking per passenger per ride
    if _hasBooking(db, rideUuid, passengerUuid):
        raise ConflictError(ALREADY_BOOKED)

    # 4️⃣ Insert + conditional decrement in one transaction
    try:
        booking = Booking(
            id=uuid.uuid4(),
            ride_id=rideUuid,
            passenger_id=passengerUuid,
            status=BOOKING_CONFIRMED,
        )
        db.add(booking)
        db.flush()

        result = db.execute(
            update(Ride)
            .where(Ride.id == rideUuid)
            .where(Ride.available_seats > 0)
            .values(available_seats=Ride.available_seats - 1)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            db.rollback()
            logger.warning(f"Ride {rideUuid} is full, booking for {passengerUuid} rolled back")
            raise ConflictError(NO_SEATS)

        db.commit()

    except IntegrityError:
        db.rollback()
        # A concurrent request by the same passenger won the unique constraint
        if _hasBooking(db, rideUuid, passengerUuid):
            raise ConflictError(ALREADY_BOOKED)
        # The token outlived its account
        if passengerUuid is None or db.get(User, passengerUuid) is None:
            logger.warning(f"Booking attempt by unknown user {passengerUuid}")
            raise NotFoundError("User not found")
        raise
    except ConflictError:
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(booking)
    logger.info(f"Booking {booking.id} confirmed: ride={rideUuid} passenger={passengerUuid}")
    return booking


def _hasBooking(db: Session, rideId, passengerId) -> bool:
    return (
        db.query(Booking.id)
        .filter(Booking.ride_id == rideId, Booking.passenger_id == passengerId)
        .first()
    ) is not None
