# products_api/models.py

"""
SQLAlchemy database models for the Products API.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from .db import Base

# Shape of the price column: 10 digits, 2 of them decimals.
PRICE_STEP = Decimal("0.01")
PRICE_LIMIT = Decimal("100000000")


def stored_price(number: float) -> Optional[Decimal]:
    """Value the price column would keep for `number`, or None if it cannot hold it."""
    if not abs(number) < float(PRICE_LIMIT):
        return None
    stored = Decimal(str(number)).quantize(PRICE_STEP, rounding=ROUND_HALF_UP)
    if abs(stored) >= PRICE_LIMIT:
        return None
    return stored


class Product(Base):
    """
    SQLAlchemy model for the 'products' table.
    """

    __tablename__ = "products"

    # Primary Key: assigned by the database, never changed afterwards.
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Product name: Required, max 255 chars.
    name = Column(String(255), nullable=False)

    # Product price: Required, numeric with 10 total digits and 2 decimal places.
    price = Column(Numeric(10, 2), nullable=False)

    # Availability: products are available unless told otherwise.
    availability = Column(Boolean, nullable=False, default=True)

    # 'created_at' defaults to current timestamp on creation.
    # 'updated_at' updates to current timestamp on every record update.
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', availability={self.availability})>"
