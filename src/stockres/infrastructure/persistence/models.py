"""SQLAlchemy table mappings.

Rows are mapped to and from the domain dataclasses by the repositories;
nothing outside ``persistence`` touches these classes.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stockres.infrastructure.database import Base


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class WarehouseModel(Base, TimestampMixin):
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True, index=True)
    business_code = Column(String(50), nullable=False, default="")
    branch_code = Column(String(50), nullable=False, default="")
    warehouse_code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    address = Column(Text)
    phone = Column(String(50))
    priority = Column(Integer, nullable=False, default=999, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    warehouse_type = Column(String(50))

    stocks = relationship("StockRecordModel", back_populates="warehouse")


class StockRecordModel(Base, TimestampMixin):
    __tablename__ = "product_stocks"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(String(100), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False)
    unit = Column(String(50), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    reserved_stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer)

    __table_args__ = (
        UniqueConstraint("product_id", "warehouse_id", "unit", name="product_stocks_unique_pool"),
    )

    warehouse = relationship("WarehouseModel", back_populates="stocks")


class CartItemModel(Base, TimestampMixin):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    product_id = Column(String(100), nullable=False)
    unit = Column(String(50), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    reservation_state = Column(String(20), nullable=False, default="NONE")
    reserved_warehouse_id = Column(Integer, ForeignKey("warehouses.id"))
    reserved_at = Column(DateTime(timezone=True), index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", "unit", name="cart_items_unique_line"),
    )


class OrderModel(Base, TimestampMixin):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="PENDING")
    placed_at = Column(DateTime(timezone=True), nullable=False)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
    )


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String(100), nullable=False)
    unit = Column(String(50), nullable=False)
    quantity = Column(Integer, nullable=False)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"))
    reservation_state = Column(String(20), nullable=False, default="RESERVED")

    order = relationship("OrderModel", back_populates="items")
