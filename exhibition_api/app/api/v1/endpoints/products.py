"""
Product endpoints for API v1.

Showcasing, listing, searching, commenting, liking and deleting
products.  Comments and likes are posted as small payloads naming the
product, mirroring the way enquiries are submitted.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from exhibition_api.app.api.deps import get_registry, http_error
from exhibition_api.app.core.security import get_caller
from exhibition_api.app.schemas.common import Confirmation
from exhibition_api.app.schemas.product import CommentCreate, LikeCreate, ProductCreate, ProductRead
from exhibition_api.app.services.errors import RegistryError
from exhibition_api.app.services.registry import ExhibitionRegistry

router = APIRouter()


@router.post("/", response_model=Confirmation, status_code=status.HTTP_201_CREATED)
async def register_product(
    product: ProductCreate,
    caller: str = Depends(get_caller),
    registry: ExhibitionRegistry = Depends(get_registry),
) -> Confirmation:
    """Showcase a product.  The owner must be a registered user."""
    try:
        message = await registry.products.register_product(product, caller)
    except RegistryError as e:
        raise http_error(e) from e
    return Confirmation(message=message)


@router.get("/", response_model=List[ProductRead])
async def list_products(registry: ExhibitionRegistry = Depends(get_registry)) -> List[ProductRead]:
    return await registry.products.list_products()


@router.get("/search", response_model=ProductRead)
async def search_product(
    productname: str = Query("", description="Exact name of the product"),
    registry: ExhibitionRegistry = Depends(get_registry),
) -> ProductRead:
    try:
        return await registry.products.search_product(productname)
    except RegistryError as e:
        raise http_error(e) from e


@router.post("/comments", response_model=Confirmation, status_code=status.HTTP_201_CREATED)
async def comment_on_product(
    comment: CommentCreate,
    caller: str = Depends(get_caller),
    registry: ExhibitionRegistry = Depends(get_registry),
) -> Confirmation:
    """Add a comment from a registered user to a product."""
    try:
        message = await registry.products.comment_on_product(comment, caller)
    except RegistryError as e:
        raise http_error(e) from e
    return Confirmation(message=message)


@router.post("/likes", response_model=Confirmation, status_code=status.HTTP_201_CREATED)
async def like_product(
    like: LikeCreate,
    caller: str = Depends(get_caller),
    registry: ExhibitionRegistry = Depends(get_registry),
) -> Confirmation:
    """Like a product as the calling principal.  Likes are not deduplicated."""
    try:
        message = await registry.products.like_product(like, caller)
    except RegistryError as e:
        raise http_error(e) from e
    return Confirmation(message=message)


@router.delete("/{productname}", response_model=Confirmation)
async def delete_product(
    productname: str,
    caller: str = Depends(get_caller),
    registry: ExhibitionRegistry = Depends(get_registry),
) -> Confirmation:
    """Delete a product and remove it from its owner's list.

    Depending on the configured delete mode the record is either
    removed or kept as a hidden tombstone.
    """
    try:
        message = await registry.products.delete_product(productname, caller)
    except RegistryError as e:
        raise http_error(e) from e
    return Confirmation(message=message)
