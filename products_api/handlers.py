# products_api/handlers.py

"""
Business actions behind the product routes.

Handlers receive input that already passed its route's rules, call the
repository and return the response payload. A missing product raises
`ProductNotFoundError` before anything is changed.
"""
import logging

from .exceptions import ProductNotFoundError
from .models import Product
from .repository import ProductRepository
from .schemas import (
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductResponse,
    ProductUpdate,
)

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Producto Eliminado"


def _envelope(product: Product) -> ProductEnvelope:
    return ProductEnvelope(data=ProductResponse.model_validate(product))


def _find_or_404(repo: ProductRepository, product_id: int) -> Product:
    product = repo.find_by_id(product_id)
    if product is None:
        logger.warning(f"Product with ID: {product_id} not found.")
        raise ProductNotFoundError(product_id)
    return product


def create_product(repo: ProductRepository, payload: ProductCreate) -> ProductEnvelope:
    logger.info(f"Creating product: {payload.name}")
    product = repo.create(payload.model_dump())
    logger.info(f"Product '{product.name}' (ID: {product.id}) created successfully.")
    return _envelope(product)


def get_products(repo: ProductRepository) -> ProductListEnvelope:
    products = repo.find_all(order_by=Product.id)
    logger.info(f"Retrieved {len(products)} products.")
    return ProductListEnvelope(
        data=[ProductResponse.model_validate(product) for product in products]
    )


def get_product_by_id(repo: ProductRepository, product_id: int) -> ProductEnvelope:
    return _envelope(_find_or_404(repo, product_id))


def update_product(
    repo: ProductRepository, product_id: int, payload: ProductUpdate
) -> ProductEnvelope:
    """Replace every mutable field of a product."""
    product = _find_or_404(repo, product_id)
    for field, value in payload.model_dump().items():
        setattr(product, field, value)
    repo.save(product)
    logger.info(f"Product '{product.name}' (ID: {product_id}) updated successfully.")
    return _envelope(product)


def update_availability(repo: ProductRepository, product_id: int) -> ProductEnvelope:
    """Flip a product's availability."""
    product = _find_or_404(repo, product_id)
    product.availability = not product.availability
    repo.save(product)
    logger.info(f"Product (ID: {product_id}) availability set to {product.availability}.")
    return _envelope(product)


def delete_product(repo: ProductRepository, product_id: int) -> str:
    product = _find_or_404(repo, product_id)
    repo.destroy(product)
    logger.info(f"Product (ID: {product_id}) deleted successfully.")
    return DELETED_MESSAGE
