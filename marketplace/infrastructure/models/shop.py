"""SQLAlchemy model for the shop table."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String

from marketplace.infrastructure.database import Base


class ShopModel(Base):
    """Database representation of a shop."""

    __tablename__ = "shop"
    __table_args__ = (Index("ix_shop_owner_status", "owner_id", "is_open"),)

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    category = Column(String(60), nullable=False, index=True)
    location_lat = Column(Float, nullable=True)
    location_lng = Column(Float, nullable=True)
    location_address = Column(String(255), nullable=True)
    mobile_number = Column(String(40), nullable=True)
    is_open = Column(Boolean, nullable=False, default=False, index=True)
    estimate_minutes = Column(Integer, nullable=True)
    estimate_action = Column(String(10), nullable=True)
    delivery_enabled = Column(Boolean, nullable=False, default=False)
    delivery_range_km = Column(Float, nullable=True)
    last_updated = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False)


__all__ = ["ShopModel"]
