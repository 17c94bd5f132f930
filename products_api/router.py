# products_api/router.py

"""
Routes of the product resource. Each route is the ordered pipeline
rule set -> input gate -> handler; no business logic lives here.
"""
from fastapi import APIRouter, Depends, status

from . import handlers
from .middleware import ValidatedRequest, validate
from .repository import ProductRepository, get_repository
from .schemas import (
    ErrorResponse,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductUpdate,
    ValidationErrorResponse,
)
from .validation import (
    CREATE_PRODUCT_RULES,
    ID_RULES,
    UPDATE_AVAILABILITY_RULES,
    UPDATE_PRODUCT_RULES,
)

router = APIRouter(prefix="/api/products", tags=["Products"])


# Documented by hand because the gate reads path and body itself
def _openapi(id_description=None, body=None) -> dict:
    extra = {}
    if id_description:
        extra["parameters"] = [
            {
                "in": "path",
                "name": "id",
                "description": id_description,
                "required": True,
                "schema": {"type": "integer"},
            }
        ]
    if body is not None:
        extra["requestBody"] = {
            "required": True,
            "content": {"application/json": {"schema": body.model_json_schema()}},
        }
    return extra


def _responses(bad_request: str, not_found: bool = True) -> dict:
    responses = {400: {"model": ValidationErrorResponse, "description": bad_request}}
    if not_found:
        responses[404] = {"model": ErrorResponse, "description": "Product Not Found"}
    return responses


@router.get(
    "",
    response_model=ProductListEnvelope,
    summary="Get a list of Products",
    description="Return a list of products",
)
def get_products(repo: ProductRepository = Depends(get_repository)):
    return handlers.get_products(repo)


@router.get(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Get a product by ID",
    description="Return a product based on its unique ID",
    responses=_responses("Bad Request - Invalid ID"),
    openapi_extra=_openapi("The id of the product to retrieve"),
)
def get_product_by_id(
    request_data: ValidatedRequest = Depends(validate(ID_RULES)),
    repo: ProductRepository = Depends(get_repository),
):
    return handlers.get_product_by_id(repo, request_data.product_id)


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Creates a new product",
    description="Returns a new record in the database",
    responses=_responses("Bad Request - invalid input data", not_found=False),
    openapi_extra=_openapi(body=ProductCreate),
)
def create_product(
    request_data: ValidatedRequest = Depends(validate(CREATE_PRODUCT_RULES)),
    repo: ProductRepository = Depends(get_repository),
):
    return handlers.create_product(repo, ProductCreate.model_validate(request_data.body))


@router.put(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Update a product with user input",
    description="Replaces every field of the product and returns it",
    responses=_responses("Bad Request - Invalid ID or Invalid input data"),
    openapi_extra=_openapi("The id of the product to update", body=ProductUpdate),
)
def update_product(
    request_data: ValidatedRequest = Depends(validate(UPDATE_PRODUCT_RULES)),
    repo: ProductRepository = Depends(get_repository),
):
    return handlers.update_product(
        repo, request_data.product_id, ProductUpdate.model_validate(request_data.body)
    )


@router.patch(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Update Product availability",
    description="Toggles the availability and returns the product",
    responses=_responses("Bad Request - Invalid ID"),
    openapi_extra=_openapi("The id of the product to update"),
)
def update_availability(
    request_data: ValidatedRequest = Depends(validate(UPDATE_AVAILABILITY_RULES)),
    repo: ProductRepository = Depends(get_repository),
):
    return handlers.update_availability(repo, request_data.product_id)


@router.delete(
    "/{id}",
    response_model=str,
    summary="Delete a Product by a given ID",
    description="Return a confirmation message",
    responses=_responses("Bad Request - Invalid ID"),
    openapi_extra=_openapi("The id of the product to delete"),
)
def delete_product(
    request_data: ValidatedRequest = Depends(validate(ID_RULES)),
    repo: ProductRepository = Depends(get_repository),
):
    return handlers.delete_product(repo, request_data.product_id)
