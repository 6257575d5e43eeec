import uuid

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.core.security import (
    MAX_PASSWORD_BYTES,
    hashPassword,
    isPasswordTooLong,
    verifyPassword,
)
from app.db.database import toUuid
from app.models.user import User


def normalizeEmail(email: str) -> str:
    return email.strip().lower()


def isInstitutionalEmail(email) -> bool:
    if not email or not isinstance(email, str):
        return False
    normalized = normalizeEmail(email)
    return "@" in normalized and normalized.endswith("@" + settings.ALLOWED_EMAIL_DOMAIN)


def isValidRollNumber(rollNumber) -> bool:
    """Roll numbers look like 261XXXXXX: nine characters starting with 2."""
    if not rollNumber or not isinstance(rollNumber, str):
        return False
    normalized = rollNumber.strip()
    return len(normalized) == 9 and normalized.startswith("2")


def _emailDomainMessage() -> str:
    return f"Please use your FCCU email address (must end with @{settings.ALLOWED_EMAIL_DOMAIN})"


def registerUser(db: Session, email, password, name, rollNumber) -> User:
    if not email or not password or not name or not rollNumber:
        raise ValidationError("All fields are required (email, password, name, roll number)")

    normalizedEmail = normalizeEmail(email)
    if not isInstitutionalEmail(normalizedEmail):
        raise ValidationError(_emailDomainMessage())

    trimmedName = name.strip()
    normalizedRollNumber = rollNumber.strip().upper()

    if len(trimmedName) < 2:
        raise ValidationError("Please enter a valid full name (at least 2 characters)")

    if not isValidRollNumber(normalizedRollNumber):
        raise ValidationError("Please enter a valid roll number (e.g., 261XXXXXX)")

    if len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long")
    if isPasswordTooLong(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")

    if db.query(User.id).filter(User.email == normalizedEmail).first():
        raise ConflictError("An account with this email already exists.")
    if db.query(User.id).filter(User.roll_number == normalizedRollNumber).first():
        raise ConflictError("An account with this roll number already exists.")

    try:
        user = User(
            id=uuid.uuid4(),
            email=normalizedEmail,
            password=hashPassword(password),
            name=trimmedName,
            roll_number=normalizedRollNumber,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        # Lost a race with a concurrent sign-up
        db.rollback()
        raise ConflictError("An account with this email or roll number already exists.")
    except Exception:
        db.rollback()
        raise

    logger.info(f"Registered user {user.id} ({user.email})")
    return user


def authenticateUser(db: Session, email, password) -> User:
    if not email or not password:
        raise ValidationError("Email and password are required")

    normalizedEmail = normalizeEmail(email)
    if not isInstitutionalEmail(normalizedEmail):
        raise ValidationError(_emailDomainMessage())

    user = db.query(User).filter(User.email == normalizedEmail).first()
    if not user:
        raise UnauthorizedError(
            "No account found with this email address. "
            "Please check your email or create a new account."
        )

    if not verifyPassword(password, user.password):
        logger.warning(f"Failed login for {normalizedEmail}")
        raise UnauthorizedError("Incorrect password. Please try again.")

    return user


def getUserById(db: Session, userId) -> User:
    userUuid = toUuid(userId)
    user = db.get(User, userUuid) if userUuid else None
    if not user:
        raise NotFoundError("User not found")
    return user


def updateProfile(db: Session, userId, name=None, rollNumber=None, avatar=None) -> User:
    """Only truthy values are applied; everything else is left untouched."""
    user = getUserById(db, userId)

    if name:
        trimmedName = name.strip()
        if len(trimmedName) < 2:
            raise ValidationError("Please enter a valid full name (at least 2 characters)")
        user.name = trimmedName
    if rollNumber:
        user.roll_number = rollNumber.strip().upper()
    if avatar:
        user.avatar = avatar

    try:
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise ConflictError("An account with this roll number already exists.")
    except Exception:
        db.rollback()
        raise

    return user
