"""SQLAlchemy model for the user table."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Index, Integer, String

from marketplace.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a marketplace account."""

    __tablename__ = "user"
    __table_args__ = (Index("ix_user_location", "location_lat", "location_lng"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(40), nullable=True)
    roles = Column(JSON, nullable=False, default=list)
    active_role = Column(String(20), nullable=False)
    location_lat = Column(Float, nullable=True)
    location_lng = Column(Float, nullable=True)
    location_address = Column(String(255), nullable=True)
    location_updated_at = Column(DateTime, nullable=True)
    subscriber_id = Column(String(128), nullable=True, index=True)
    push_enabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=True)


__all__ = ["UserModel"]
