from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


class RideCreateRequest(BaseModel):
    """Locations come straight from the map picker: {name, lat, lng, ...}"""
    pickup: Optional[Dict[str, Any]] = None
    dropoff: Optional[Dict[str, Any]] = None
    departureTime: Optional[str] = None  # HH:MM, UTC
    rideDate: Optional[str] = None  # YYYY-MM-DD
    availableSeats: Optional[int] = None
    isRecurring: bool = False
    recurringDays: List[str] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "pickup": {"name": "Gulberg III, Lahore", "lat": 31.5204, "lng": 74.3587},
                "dropoff": {"name": "FCCU, Ferozepur Road", "lat": 31.5225, "lng": 74.3318},
                "departureTime": "08:15",
                "rideDate": "2026-10-20",
                "availableSeats": 3,
                "isRecurring": True,
                "recurringDays": ["MON", "WED"]
            }
        }


class RideSearchRequest(BaseModel):
    pickup: Optional[Dict[str, Any]] = None
    dropoff: Optional[Dict[str, Any]] = None
    date: Optional[str] = None  # YYYY-MM-DD
    time: Optional[str] = None  # HH:MM


class RideResponse(BaseModel):
    id: str
    driverId: str
    driverName: str
    driverAvatar: str
    rating: float
    totalRides: int
    pickup: Dict[str, Any]
    dropoff: Dict[str, Any]
    departureTime: datetime
    availableSeats: int
    totalSeats: int
    price: float
    verified: bool
    route: str
    isRecurring: bool
    recurringDays: List[str]
    createdAt: datetime


class RideCreateResponse(BaseModel):
    message: str
    ride: RideResponse


class RideListResponse(BaseModel):
    rides: List[RideResponse]
    total: int


class OfferedRideBooking(BaseModel):
    id: str
    passengerId: str
    passengerName: str
    passengerAvatar: str
    status: str
    bookedAt: datetime


class OfferedRideResponse(BaseModel):
    id: str
    pickup: Dict[str, Any]
    dropoff: Dict[str, Any]
    departureTime: datetime
    availableSeats: int
    totalSeats: int
    price: float
    route: str
    isRecurring: bool
    recurringDays: List[str]
    createdAt: datetime
    bookings: List[OfferedRideBooking]


class BookedRideResponse(BaseModel):
    bookingId: str
    status: str
    bookedAt: datetime
    ride: RideResponse


class RideHistoryResponse(BaseModel):
    offeredRides: List[OfferedRideResponse]
    bookedRides: List[BookedRideResponse]
