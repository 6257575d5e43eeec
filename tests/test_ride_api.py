"""Ride creation, search and history tests."""

from datetime import timedelta

import pytest

from app.db.database import utcNow
from app.db.seatBooking import bookSeat

GULBERG = {"name": "Gulberg III, Lahore", "lat": 31.5204, "lng": 74.3587}
CAMPUS = {"name": "FCCU, Ferozepur Road, Lahore", "lat": 31.5225, "lng": 74.3318}


def _rideRequest(**overrides):
    departure = utcNow() + timedelta(days=2)
    payload = {
        "pickup": GULBERG,
        "dropoff": CAMPUS,
        "departureTime": "08:15",
        "rideDate": departure.strftime("%Y-%m-%d"),
        "availableSeats": 3,
        "isRecurring": True,
        "recurringDays": ["MON", "WED"],
    }
    payload.update(overrides)
    return payload


def test_create_ride(client, makeUser, authHeaders):
    driver = makeUser("Demo Driver")
    payload = _rideRequest()

    response = client.post("/api/rides/create", json=payload, headers=authHeaders(driver))

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Ride created successfully"
    ride = data["ride"]
    assert ride["driverId"] == str(driver.id)
    assert ride["driverName"] == "Demo Driver"
    assert ride["route"] == "Gulberg III → FCCU"
    assert ride["availableSeats"] == ride["totalSeats"] == 3
    assert ride["price"] == 0
    assert ride["pickup"] == GULBERG
    assert ride["departureTime"].startswith(f"{payload['rideDate']}T08:15")
    assert ride["isRecurring"] is True
    assert ride["recurringDays"] == ["MON", "WED"]


def test_create_ride_requires_token(client):
    assert client.post("/api/rides/create", json=_rideRequest()).status_code == 401


@pytest.mark.parametrize(
    "overrides, detail",
    [
        ({"pickup": None}, "Missing required fields"),
        ({"dropoff": {"lat": 1, "lng": 2}}, "Missing required fields"),
        ({"availableSeats": 0}, "Missing required fields"),
        ({"availableSeats": 9}, "Available seats must be between 1 and 8"),
        ({"rideDate": "2020-01-01"}, "Cannot create rides for past dates/times"),
        ({"departureTime": "8 o'clock"}, "Invalid date or time format (expected YYYY-MM-DD and HH:MM)"),
    ],
)
def test_create_ride_rejects_invalid_input(client, makeUser, authHeaders, overrides, detail):
    response = client.post("/api/rides/create", json=_rideRequest(**overrides), headers=authHeaders(makeUser()))

    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_list_rides_only_future_with_seats(client, makeUser, makeRide):
    driver = makeUser()
    later = makeRide(driver, hoursAhead=5, pickupName="Model Town, Lahore")
    sooner = makeRide(driver, hoursAhead=1)
    makeRide(driver, seats=2, available=0)
    makeRide(driver, hoursAhead=-3)

    response = client.get("/api/rides/search")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [r["id"] for r in data["rides"]] == [str(sooner.id), str(later.id)]


def test_search_by_pickup_name(client, makeUser, makeRide):
    driver = makeUser()
    gulberg = makeRide(driver, pickupName="Gulberg III, Lahore")
    makeRide(driver, pickupName="DHA Phase 5, Lahore")

    response = client.post("/api/rides/search", json={"pickup": {"name": "gulBERG"}})

    assert response.status_code == 200
    assert [r["id"] for r in response.json()["rides"]] == [str(gulberg.id)]


def test_search_by_date_and_time_window(client, makeUser, makeRide):
    driver = makeUser()
    target = makeRide(driver, hoursAhead=30)
    makeRide(driver, hoursAhead=32)

    departure = target.departure_time + timedelta(minutes=20)
    response = client.post(
        "/api/rides/search",
        json={"date": departure.strftime("%Y-%m-%d"), "time": departure.strftime("%H:%M")},
    )

    assert response.status_code == 200
    assert [r["id"] for r in response.json()["rides"]] == [str(target.id)]


def test_search_by_date_only(client, makeUser, makeRide):
    driver = makeUser()
    inTwoDays = makeRide(driver, hoursAhead=48)
    makeRide(driver, hoursAhead=96)

    response = client.post(
        "/api/rides/search",
        json={"date": inTwoDays.departure_time.strftime("%Y-%m-%d")},
    )

    assert response.status_code == 200
    ids = [r["id"] for r in response.json()["rides"]]
    assert str(inTwoDays.id) in ids
    assert len(ids) == 1


def test_search_skips_full_rides(client, makeUser, makeRide):
    makeRide(makeUser(), seats=2, available=0)

    response = client.post("/api/rides/search", json={})

    assert response.json() == {"rides": [], "total": 0}


def test_history(client, db, makeUser, makeRide, authHeaders):
    driver = makeUser("Demo Driver")
    passenger = makeUser("Ayesha Khan")
    offered = makeRide(driver, seats=3)
    other = makeRide(passenger, seats=2)
    bookSeat(db, offered.id, passenger.id)
    bookSeat(db, other.id, driver.id)

    response = client.get("/api/rides/history", headers=authHeaders(driver))

    assert response.status_code == 200
    data = response.json()

    assert len(data["offeredRides"]) == 1
    mine = data["offeredRides"][0]
    assert mine["id"] == str(offered.id)
    assert mine["availableSeats"] == 2
    assert [b["passengerName"] for b in mine["bookings"]] == ["Ayesha Khan"]
    assert mine["bookings"][0]["status"] == "confirmed"

    assert len(data["bookedRides"]) == 1
    booked = data["bookedRides"][0]
    assert booked["status"] == "confirmed"
    assert booked["ride"]["id"] == str(other.id)
    assert booked["ride"]["driverName"] == "Ayesha Khan"


def test_ai_suggestions(client):
    response = client.post("/api/ai/suggestions", json={"location": "Gulberg"})

    assert response.status_code == 200
    suggestions = response.json()["suggestions"]
    assert len(suggestions) == 4
    assert suggestions[0] == "Popular route from Gulberg to FCCU campus"


def test_health(client):
    response = client.get("/health")

    assert response.json() == {"status": "OK", "service": "unipool-backend"}
