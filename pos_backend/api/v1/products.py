"""Product inventory routes. Reads need any authenticated user; writes are role-gated."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from pos_backend.api.deps import get_product_service
from pos_backend.api.v1.auth import get_current_user, require_roles
from pos_backend.core.authorization import PRODUCT_DELETE_ROLES, PRODUCT_WRITE_ROLES
from pos_backend.schemas.auth import CurrentUser
from pos_backend.schemas.common import MessageResponse
from pos_backend.schemas.product import ProductRequest, ProductResponse
from pos_backend.services.products import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()

require_product_writer = require_roles(*PRODUCT_WRITE_ROLES)
require_product_deleter = require_roles(*PRODUCT_DELETE_ROLES)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductRequest,
    user: Annotated[CurrentUser, Depends(require_product_writer)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    """Create a product (ADMIN or MANAGER)."""
    logger.info("Creating new product: %s (SKU: %s) by user: %s", body.name, body.sku, user.username)
    return ProductResponse.model_validate(service.create(body))


@router.get("", response_model=list[ProductResponse])
def list_products(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> list[ProductResponse]:
    return [ProductResponse.model_validate(p) for p in service.list_all()]


@router.get("/sku/{sku}", response_model=ProductResponse)
def get_product_by_sku(
    sku: str,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    return ProductResponse.model_validate(service.get_by_sku(sku))


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    return ProductResponse.model_validate(service.get(product_id))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    body: ProductRequest,
    user: Annotated[CurrentUser, Depends(require_product_writer)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    """Replace every field of a product (ADMIN or MANAGER)."""
    logger.info("Updating product ID: %s with SKU: %s by user: %s", product_id, body.sku, user.username)
    return ProductResponse.model_validate(service.update(product_id, body))


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    user: Annotated[CurrentUser, Depends(require_product_deleter)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> MessageResponse:
    """Delete a product (ADMIN only)."""
    logger.info("Deleting product with ID: %s by user: %s", product_id, user.username)
    service.delete(product_id)
    return MessageResponse(message="Product deleted successfully")
