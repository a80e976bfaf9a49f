"""
Business logic for exhibition users.

Users are keyed by username.  A user record keeps the caller principal
that registered it and the names of the products it owns; the product
records themselves are read from the product collection.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List

from ..core.identity import utcnow
from ..core.storage import Storage
from ..schemas.product import ProductRead
from ..schemas.user import UserCreate, UserRead, UserUpdate
from .errors import (
    AlreadyRegistered,
    CallerMismatch,
    RegistrationFailed,
    UserNotFound,
    require,
    require_path_safe,
)

logger = logging.getLogger(__name__)


def check_caller_binding(user: UserRead, caller: str, enforce: bool) -> None:
    """Raise ``CallerMismatch`` if ``caller`` may not act as ``user``.

    Only applies when binding is enforced; otherwise any caller may
    claim any username.
    """
    if enforce and user.id != caller:
        logger.warning("Caller %s attempted to act as %s", caller, user.username)
        raise CallerMismatch(f"Caller {caller} is not allowed to act as {user.username}.")


class UserService:
    """Registration, lookup and profile updates for users."""

    def __init__(self, storage: Storage, enforce_caller_binding: bool = False) -> None:
        self.storage = storage
        self.enforce_caller_binding = enforce_caller_binding

    async def get_user(self, username: str) -> UserRead:
        user = self.storage.users.get(username) if username else None
        if user is None:
            raise UserNotFound(f"User with username {username} not found.")
        return user

    async def register_user(self, data: UserCreate, caller: str) -> str:
        """Register a new user on behalf of ``caller``.

        The caller principal is recorded as the user's ``id``.  Fails if
        any field is empty, the username contains ``/`` or is taken.
        """
        require(data.username, data.email, data.usercontacts)
        require_path_safe(data.username, "Username")
        if self.storage.users.contains(data.username):
            logger.info("Rejected duplicate registration of %s", data.username)
            raise AlreadyRegistered("Username is already registered, try another one.")

        user = UserRead(
            username=data.username,
            id=caller,
            email=data.email,
            usercontacts=data.usercontacts,
            products=[],
            created_at=utcnow(),
        )
        try:
            self.storage.users.insert(data.username, user)
        except sqlite3.Error as exc:
            logger.error("Failed to store user %s: %s", data.username, exc)
            raise RegistrationFailed("Registration could not be saved, please try again.") from exc
        logger.info("Registered user %s (caller %s)", data.username, caller)
        return "You have successfully registered for this year's exhibition show."

    async def update_user_profile(self, username: str, data: UserUpdate, caller: str) -> str:
        """Replace the contact details of an existing user."""
        user = await self.get_user(username)
        check_caller_binding(user, caller, self.enforce_caller_binding)
        changes = data.model_dump(exclude_none=True)
        updated = user.model_copy(update=changes)
        self.storage.users.insert(username, updated)
        logger.info("Updated profile of %s (%s)", username, ", ".join(sorted(changes)) or "no changes")
        return "User profile updated successfully."

    async def list_user_products(self, username: str) -> List[ProductRead]:
        """Return the live products owned by ``username``, in listing order."""
        user = await self.get_user(username)
        products = []
        for name in user.products:
            product = self.storage.products.get(name)
            # Skip names whose record was replaced by another owner or tombstoned.
            if product is None or product.is_deleted or product.owner != username:
                continue
            products.append(product)
        return products
