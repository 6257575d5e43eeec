from pydantic import BaseModel


class BookingResponse(BaseModel):
    id: str
    rideId: str
    passengerId: str
    status: str


class BookSeatResponse(BaseModel):
    message: str
    booking: BookingResponse
