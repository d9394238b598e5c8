"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text

from marketplace.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for in-app notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_advertisement_recipient", "advertisement_id", "recipient_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    shop_id = Column(Integer, ForeignKey("shop.id"), nullable=True, index=True)
    advertisement_id = Column(
        Integer, ForeignKey("advertisement.id"), nullable=True, index=True
    )
    event_type = Column(String(50), nullable=False)
    title = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False)
    read_at = Column(DateTime, nullable=True)


__all__ = ["NotificationModel"]
