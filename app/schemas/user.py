from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UserRegisterRequest(BaseModel):
    # Left optional so missing fields get the same 400 as the other checks
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    rollNumber: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "email": "ayesha@formanite.fccollege.edu.pk",
                "password": "carpool123",
                "name": "Ayesha Khan",
                "rollNumber": "261234567"
            }
        }


class UserLoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    rollNumber: Optional[str] = None
    avatar: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    rollNumber: str
    avatar: Optional[str] = None
    rating: float
    totalRides: int
    isVerified: bool


class ProfileResponse(UserResponse):
    createdAt: datetime


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class ProfileEnvelope(BaseModel):
    user: ProfileResponse


class ProfileUpdateResponse(BaseModel):
    message: str
    user: ProfileResponse
