from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.security import createAccessToken, getCurrentUserId
from app.db.database import getDb
from app.db.userUtils import authenticateUser, getUserById, registerUser, updateProfile
from app.models.user import User
from app.schemas.user import (
    AuthResponse,
    ProfileEnvelope,
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)

router = APIRouter(prefix="/api/users", tags=["User"])


def toUserResponse(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        name=user.name,
        rollNumber=user.roll_number,
        avatar=user.avatar,
        rating=user.rating,
        totalRides=user.total_rides,
        isVerified=user.is_verified
    )


def toProfileResponse(user: User) -> ProfileResponse:
    return ProfileResponse(
        **toUserResponse(user).model_dump(),
        createdAt=user.created_at
    )


# ============================================
# REGISTRATION & LOGIN
# ============================================

@router.post("/register", response_model=AuthResponse)
def register(request: UserRegisterRequest, db: Session = Depends(getDb)):
    """
    Create an account for a student with an institutional email.
    Returns a ready-to-use access token so the UI can skip the login step.
    """
    user = registerUser(
        db,
        email=request.email,
        password=request.password,
        name=request.name,
        rollNumber=request.rollNumber
    )
    return AuthResponse(
        message="Account created successfully! Welcome to UniPool.",
        token=createAccessToken(user.id, user.email),
        user=toUserResponse(user)
    )


@router.post("/login", response_model=AuthResponse)
def login(request: UserLoginRequest, db: Session = Depends(getDb)):
    user = authenticateUser(db, request.email, request.password)
    return AuthResponse(
        message="Login successful! Welcome back to UniPool.",
        token=createAccessToken(user.id, user.email),
        user=toUserResponse(user)
    )


# ============================================
# PROFILE
# ============================================

@router.get("/profile", response_model=ProfileEnvelope)
def getProfile(userId: str = Depends(getCurrentUserId), db: Session = Depends(getDb)):
    user = getUserById(db, userId)
    return ProfileEnvelope(user=toProfileResponse(user))


@router.put("/profile", response_model=ProfileUpdateResponse)
def putProfile(
    request: ProfileUpdateRequest,
    userId: str = Depends(getCurrentUserId),
    db: Session = Depends(getDb)
):
    """Partial update: empty fields keep their current value."""
    user = updateProfile(
        db,
        userId,
        name=request.name,
        rollNumber=request.rollNumber,
        avatar=request.avatar
    )
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=toProfileResponse(user)
    )
