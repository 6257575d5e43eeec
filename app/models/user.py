import uuid
from sqlalchemy import Column, String, Float, Integer, Boolean, DateTime, Uuid
from app.db.database import Base, utcNow


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False)  # stored lower-cased
    password = Column(String, nullable=False)  # bcrypt hash
    name = Column(String, nullable=False)
    roll_number = Column(String, unique=True, nullable=False)
    avatar = Column(String, nullable=True)

    rating = Column(Float, nullable=False, default=5.0)
    total_rides = Column(Integer, nullable=False, default=0)
    is_verified = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=utcNow)
