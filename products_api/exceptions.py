# products_api/exceptions.py

"""
Errors raised while serving a product request. Each one is turned into a
JSON response by the handlers registered in `middleware.py`.
"""
from typing import List

from .schemas import FieldError


class InputValidationError(Exception):
    """One or more declared request constraints do not hold."""

    def __init__(self, errors: List[FieldError]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class ProductNotFoundError(Exception):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class StoreError(Exception):
    """The database rejected or failed an operation."""
