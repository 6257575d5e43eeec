"""
Seed script to populate the database with demo students and rides.
Run with: python scripts/seed_data.py  (after `alembic upgrade head`)
"""
import sys
from datetime import timedelta
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.config import settings
from app.core.security import hashPassword
from app.db.database import SessionLocal, utcNow
from app.db.rideUtils import buildRouteName
from app.models.user import User
from app.models.ride import Ride
from app.models.booking import Booking
import uuid


DEMO_PASSWORD = "password123"

# Around FCCU, Lahore
CAMPUS = {"name": "FCCU, Ferozepur Road, Lahore", "lat": 31.5225, "lng": 74.3318}


def clear_existing_data(db):
    """Clear existing bookings, rides and users"""
    print("Clearing existing data...")
    db.query(Booking).delete()
    db.query(Ride).delete()
    db.query(User).delete()
    db.commit()
    print("✓ Existing data cleared")


def create_users(db):
    students = [
        ("Demo Driver", "driver", "261000001"),
        ("Ayesha Khan", "ayesha", "261000002"),
        ("Bilal Ahmed", "bilal", "261000003"),
        ("Sara Malik", "sara", "261000004"),
    ]

    password = hashPassword(DEMO_PASSWORD)
    users = []
    for name, handle, roll in students:
        user = User(
            id=uuid.uuid4(),
            email=f"{handle}@{settings.ALLOWED_EMAIL_DOMAIN}",
            password=password,
            name=name,
            roll_number=roll,
            is_verified=True
        )
        db.add(user)
        users.append(user)

    db.commit()
    print(f"✓ Created {len(users)} users (password for all: '{DEMO_PASSWORD}')")
    return users


def create_rides(db, users):
    """Three rides to campus; the last one is already full"""
    driver, ayesha, bilal, sara = users
    now = utcNow().replace(second=0, microsecond=0)

    rides_data = [
        (driver, {"name": "Gulberg III, Lahore", "lat": 31.5204, "lng": 74.3587}, 2, 4, [ayesha]),
        (sara, {"name": "Model Town, Lahore", "lat": 31.4834, "lng": 74.3262}, 5, 3, []),
        (bilal, {"name": "DHA Phase 5, Lahore", "lat": 31.4627, "lng": 74.4088}, 24, 1, [sara]),
    ]

    rides = []
    for ride_driver, pickup, hours_ahead, seats, passengers in rides_data:
        ride = Ride(
            id=uuid.uuid4(),
            driver_id=ride_driver.id,
            pickup=pickup,
            dropoff=CAMPUS,
            pickup_name=pickup["name"],
            departure_time=now + timedelta(hours=hours_ahead),
            total_seats=seats,
            available_seats=seats - len(passengers),
            price=0,
            route=buildRouteName(pickup, CAMPUS),
            is_recurring=False,
            recurring_days=[]
        )
        db.add(ride)
        db.flush()

        for passenger in passengers:
            db.add(Booking(id=uuid.uuid4(), ride_id=ride.id, passenger_id=passenger.id))

        rides.append(ride)
        print(f"✓ {ride.route} in {hours_ahead}h ({ride.available_seats}/{seats} seats left)")

    db.commit()
    return rides


def main():
    print("=" * 60)
    print("SEEDING DATABASE WITH DEMO DATA")
    print("=" * 60)

    db = SessionLocal()

    try:
        clear_existing_data(db)
        users = create_users(db)
        rides = create_rides(db, users)

        print("\n" + "=" * 60)
        print("✓ SEEDING COMPLETE")
        print("=" * 60)
        print(f"Created: {len(users)} users, {len(rides)} rides")
        print(f"\nLog in with: {users[0].email} / {DEMO_PASSWORD}")

    except Exception as e:
        print(f"\n✗ ERROR: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
