# inventory_service/models.py

"""
SQLAlchemy database models for the Inventory Service.
These classes define the structure of tables in the database.
"""

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from .db import Base


class Product(Base):
    """
    SQLAlchemy model for the 'products' table.
    Represents an inventory item with its category, stock and unit price.
    """

    __tablename__ = "products"

    # Primary Key: auto-incrementing (SERIAL on PostgreSQL).
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False)

    # Returned as float so both backends render prices the same way.
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)

    description = Column(Text, nullable=True)

    # Both timestamps come from the same now() on insert.
    # 'updated_at' is refreshed to the current timestamp on every update.
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "price": self.price,
            "description": self.description if self.description is not None else "",
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def __repr__(self):
        # A helpful representation when debugging
        return f"<Product(id={self.id}, name='{self.name}', quantity={self.quantity})>"
