"""SQLAlchemy model for customer orders."""

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text

from marketplace.infrastructure.database import Base


class OrderModel(Base):
    """Database representation of an order.

    Line items are stored as a JSON snapshot; they are never updated after
    the order is created.
    """

    __tablename__ = "order"
    __table_args__ = (
        Index("ix_order_shop_status", "shop_id", "status"),
        Index("ix_order_customer_status", "customer_id", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shop.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    customer_name = Column(String(120), nullable=False)
    customer_contact = Column(String(255), nullable=True)
    order_type = Column(String(20), nullable=False)
    delivery_lat = Column(Float, nullable=True)
    delivery_lng = Column(Float, nullable=True)
    delivery_address = Column(String(255), nullable=True)
    items = Column(JSON, nullable=False, default=list)
    total_amount = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, index=True)
    estimate_minutes = Column(Integer, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    customer_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=True)


__all__ = ["OrderModel"]
