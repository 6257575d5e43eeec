from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Header

from app.core.config import settings
from app.core.exceptions import UnauthorizedError

# bcrypt only looks at the first 72 bytes and newer releases refuse anything longer
MAX_PASSWORD_BYTES = 72


def isPasswordTooLong(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hashPassword(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verifyPassword(password: str, hashedPassword: str) -> bool:
    if isPasswordTooLong(password):
        return False
    return bcrypt.checkpw(password.encode("utf-8"), hashedPassword.encode("utf-8"))


def createAccessToken(userId: str, email: str) -> str:
    payload = {
        "userId": str(userId),
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS),
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decodeAccessToken(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.PyJWTError:
        raise UnauthorizedError()


def getCurrentUserId(authorization: Optional[str] = Header(default=None)) -> str:
    """
    Resolve the caller from `Authorization: Bearer <token>`.
    The returned id is trusted by every service function downstream.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError()

    data = decodeAccessToken(authorization[len("Bearer "):])
    userId = data.get("userId")
    if not userId:
        raise UnauthorizedError()
    return userId
