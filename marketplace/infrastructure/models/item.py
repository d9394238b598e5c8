"""SQLAlchemy model for inventory items."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text

from marketplace.infrastructure.database import Base


class ItemModel(Base):
    """Database representation of a shop inventory item."""

    __tablename__ = "item"
    __table_args__ = (Index("ix_item_shop_stock", "shop_id", "in_stock"),)

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shop.id"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=True)
    price_description = Column(String(120), nullable=True)
    category = Column(String(60), nullable=True)
    in_stock = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)


__all__ = ["ItemModel"]
