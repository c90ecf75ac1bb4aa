# inventory_service/api.py

"""
Product and statistics endpoints.

Each endpoint talks to whichever backend was selected at startup through the
``get_backend`` dependency, so validation and response shapes are identical
in PostgreSQL and in-memory mode.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from .backends import ProductBackend
from .schemas import (
    MessageResponse,
    ProductCreated,
    ProductPayload,
    ProductResponse,
    StatsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["products"])

NOT_FOUND = "Product not found"


def get_backend(request: Request) -> ProductBackend:
    """
    Dependency returning the backend chosen at startup.
    Tests override it to inject an isolated backend.
    """
    return request.app.state.backend


def _internal_error(action: str, e: Exception) -> HTTPException:
    logger.error(f"Error {action}: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
    )


@router.get(
    "/products",
    response_model=List[ProductResponse],
    summary="List all products, newest first",
)
def list_products(backend: ProductBackend = Depends(get_backend)):
    logger.info("Listing products")
    try:
        products = backend.list_products()
    except Exception as e:
        raise _internal_error("listing products", e)
    logger.info(f"Retrieved {len(products)} products.")
    return products


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    summary="Retrieve a product by ID",
)
def get_product(product_id: str, backend: ProductBackend = Depends(get_backend)):
    """
    Returns a single product, or 404 if no product has this ID.
    Non-numeric IDs never match a product.
    """
    logger.info(f"Fetching product with ID: {product_id}")
    try:
        product = backend.get_product(product_id)
    except Exception as e:
        raise _internal_error(f"fetching product {product_id}", e)
    if product is None:
        logger.warning(f"Product with ID: {product_id} not found.")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return product


@router.post(
    "/products",
    response_model=ProductCreated,
    summary="Create a new product",
)
def create_product(payload: ProductPayload, backend: ProductBackend = Depends(get_backend)):
    """
    Creates a product from name, category, quantity, price and an optional
    description. Responds 400 when any required field is absent; zero is a
    valid quantity or price.
    """
    if payload.missing_required():
        logger.warning("Rejected product creation with missing required fields.")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields"
        )

    logger.info(f"Creating product: {payload.name}")
    try:
        product_id = backend.create_product(payload.to_fields())
    except Exception as e:
        raise _internal_error("creating product", e)
    logger.info(f"Product '{payload.name}' (ID: {product_id}) created successfully.")
    return {"id": product_id, "message": "Product created successfully"}


@router.put(
    "/products/{product_id}",
    response_model=MessageResponse,
    summary="Replace an existing product's fields",
)
def update_product(
    product_id: str, payload: ProductPayload, backend: ProductBackend = Depends(get_backend)
):
    """
    Overwrites name, category, quantity, price and description together and
    refreshes `updated_at`. Fields are not checked for presence here.
    """
    logger.info(f"Updating product with ID: {product_id}")
    try:
        updated = backend.update_product(product_id, payload.to_fields())
    except Exception as e:
        raise _internal_error(f"updating product {product_id}", e)
    if not updated:
        logger.warning(f"Product with ID: {product_id} not found for update.")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    logger.info(f"Product (ID: {product_id}) updated successfully.")
    return {"message": "Product updated successfully"}


@router.delete(
    "/products/{product_id}",
    response_model=MessageResponse,
    summary="Delete a product by ID",
)
def delete_product(product_id: str, backend: ProductBackend = Depends(get_backend)):
    logger.info(f"Attempting to delete product with ID: {product_id}")
    try:
        deleted = backend.delete_product(product_id)
    except Exception as e:
        raise _internal_error(f"deleting product {product_id}", e)
    if not deleted:
        logger.warning(f"Product with ID: {product_id} not found for deletion.")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    logger.info(f"Product (ID: {product_id}) deleted successfully.")
    return {"message": "Product deleted successfully"}


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Aggregate inventory statistics",
)
def get_stats(backend: ProductBackend = Depends(get_backend)):
    """
    Returns the product count, total units in stock, number of distinct
    categories and total stock value (quantity x price).
    """
    try:
        return backend.get_stats()
    except Exception as e:
        raise _internal_error("computing stats", e)
