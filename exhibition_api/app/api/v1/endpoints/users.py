"""
User endpoints for API v1.

Registration, lookup and profile updates.  Usernames act as the
credential: the caller principal taken from the bearer token is only
compared with the user's recorded principal when caller binding is
enforced.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from exhibition_api.app.api.deps import get_registry, http_error
from exhibition_api.app.core.security import get_caller
from exhibition_api.app.schemas.common import Confirmation
from exhibition_api.app.schemas.product import ProductRead
from exhibition_api.app.schemas.user import UserCreate, UserRead, UserUpdate
from exhibition_api.app.services.errors import RegistryError
from exhibition_api.app.services.registry import ExhibitionRegistry

router = APIRouter()


@router.post("/", response_model=Confirmation, status_code=status.HTTP_201_CREATED)
async def register_user(
    user: UserCreate,
    caller: str = Depends(get_caller),
    registry: ExhibitionRegistry = Depends(get_registry),
) -> Confirmation:
    """Register a new user.

    The caller principal is recorded as the user's ``id``.  Returns 409
    if the username is already taken.
    """
    try:
        message = await registry.users.register_user(user, caller)
    except RegistryError as e:
        raise http_error(e) from e
    return Confirmation(message=message)


@router.get("/{username}", response_model=UserRead)
async def get_user(
    username: str,
    registry: ExhibitionRegistry = Depends(get_registry),
) -> UserRead:
    try:
        return await registry.users.get_user(username)
    except RegistryError as e:
        raise http_error(e) from e


@router.put("/{username}", response_model=Confirmation)
async def update_user_profile(
    username: str,
    body: UserUpdate,
    caller: str = Depends(get_caller),
    registry: ExhibitionRegistry = Depends(get_registry),
) -> Confirmation:
    """Replace a user's email and/or contacts."""
    try:
        message = await registry.users.update_user_profile(username, body, caller)
    except RegistryError as e:
        raise http_error(e) from e
    return Confirmation(message=message)


@router.get("/{username}/products", response_model=List[ProductRead])
async def list_user_products(
    username: str,
    registry: ExhibitionRegistry = Depends(get_registry),
) -> List[ProductRead]:
    """List the products currently showcased by a user."""
    try:
        return await registry.users.list_user_products(username)
    except RegistryError as e:
        raise http_error(e) from e
