"""SQLAlchemy model for shop advertisements."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text

from marketplace.infrastructure.database import Base


class AdvertisementModel(Base):
    """Database representation of an advertisement."""

    __tablename__ = "advertisement"

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shop.id"), nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    notifications_sent = Column(Integer, nullable=False, default=0)
    has_discount = Column(Boolean, nullable=False, default=False)
    discount_percentage = Column(Float, nullable=True)
    discount_text = Column(String(120), nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)


__all__ = ["AdvertisementModel"]
