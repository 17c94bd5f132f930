# products_api/repository.py

"""
Persistence boundary for products. Nothing else in the service talks to
the database session directly.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import get_db
from .exceptions import StoreError
from .models import Product

logger = logging.getLogger(__name__)

# Largest value the `id` column can hold; anything above cannot exist.
MAX_PRODUCT_ID = 2**31 - 1


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _store_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error {action}: {e}", exc_info=True)
            raise StoreError(f"Could not complete '{action}'.") from e

    def create(self, fields: Dict[str, Any]) -> Product:
        with self._store_errors("creating product"):
            product = Product(**fields)
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        return product

    def find_all(self, order_by=Product.id) -> List[Product]:
        with self._store_errors("listing products"):
            return self.db.query(Product).order_by(order_by.asc()).all()

    def find_by_id(self, product_id: int) -> Optional[Product]:
        if not 0 < product_id <= MAX_PRODUCT_ID:
            return None
        with self._store_errors(f"fetching product {product_id}"):
            return self.db.get(Product, product_id)

    def save(self, product: Product) -> Product:
        with self._store_errors(f"saving product {product.id}"):
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        return product

    def destroy(self, product: Product) -> None:
        with self._store_errors(f"deleting product {product.id}"):
            self.db.delete(product)
            self.db.commit()


def get_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Dependency giving each request a repository over its own session."""
    return ProductRepository(db)
