"""
Service layer for exhibition products.

Products are keyed by name in a single product collection.  Comments
and likes are embedded in the product record; the owner's user record
only lists the product name.  Operations that touch both a product and
its owner write the two records one after the other without rollback.

Deletion honours the configured delete mode: ``hard`` drops the record
together with its comments and likes, ``tombstone`` keeps it with
``deleted_at`` set.  Tombstoned products behave exactly like missing
ones for every public operation.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from ..core.config import DELETE_MODE_HARD, DELETE_MODE_TOMBSTONE
from ..core.identity import generate_id, utcnow
from ..core.storage import Storage
from ..schemas.product import CommentCreate, CommentRead, LikeCreate, ProductCreate, ProductRead
from ..schemas.user import UserRead
from .errors import (
    NotRegistered,
    ProductNotAvailable,
    RegistrationFailed,
    UserNotFound,
    require,
    require_path_safe,
)
from .user_service import check_caller_binding

logger = logging.getLogger(__name__)


class ProductService:
    """Showcasing, browsing and reacting to products."""

    def __init__(
        self,
        storage: Storage,
        delete_mode: str = DELETE_MODE_HARD,
        enforce_caller_binding: bool = False,
    ) -> None:
        self.storage = storage
        self.delete_mode = delete_mode
        self.enforce_caller_binding = enforce_caller_binding

    def get_live_product(self, name: str) -> ProductRead:
        """Return the product called ``name`` or raise ``ProductNotAvailable``."""
        product = self.storage.products.get(name) if name else None
        if product is None or product.is_deleted:
            raise ProductNotAvailable(f"Product with name {name} is not available.")
        return product

    async def register_product(self, data: ProductCreate, caller: str) -> str:
        """Showcase a product owned by a registered user.

        Registering under an existing name replaces the stored record,
        including its comments and likes, and moves the name to the new
        owner's product list.  With caller binding enforced, replacing a
        live product of another user requires acting as that user.
        """
        require(data.name, data.description, data.owner)
        require_path_safe(data.name, "Product name")
        owner = self.storage.users.get(data.owner)
        if owner is None:
            logger.info("Rejected product %s from unregistered owner %s", data.name, data.owner)
            raise NotRegistered("Only registered users can showcase their products.")
        check_caller_binding(owner, caller, self.enforce_caller_binding)

        previous = self.storage.products.get(data.name)
        if previous is not None and not previous.is_deleted and previous.owner != data.owner:
            # Taking over a live product also requires acting as its current owner.
            current_owner = self.storage.users.get(previous.owner)
            if current_owner is not None:
                check_caller_binding(current_owner, caller, self.enforce_caller_binding)
        product = ProductRead(
            name=data.name,
            owner=data.owner,
            id=generate_id(),
            description=data.description,
            comments=[],
            likes=[],
            created_at=utcnow(),
        )
        try:
            self.storage.products.insert(data.name, product)
        except sqlite3.Error as exc:
            logger.error("Failed to store product %s: %s", data.name, exc)
            raise RegistrationFailed("Product could not be saved, please try again.") from exc

        if previous is not None and previous.owner != data.owner:
            self._release(previous.owner, data.name)
        if data.name not in owner.products:
            owner.products.append(data.name)
            self.storage.users.insert(owner.username, owner)

        if previous is not None:
            logger.info("Replaced product %s (owner %s)", data.name, data.owner)
        else:
            logger.info("Registered product %s (owner %s)", data.name, data.owner)
        return "Product added for exhibition successfully."

    async def list_products(self) -> List[ProductRead]:
        return [product for product in self.storage.products.values() if not product.is_deleted]

    async def search_product(self, productname: str) -> ProductRead:
        require(productname, message="Product name field is empty.")
        return self.get_live_product(productname)

    async def comment_on_product(self, data: CommentCreate, caller: str) -> str:
        """Append a comment by a registered user to a product."""
        require(data.by, data.comment, data.productname)
        author = self.storage.users.get(data.by)
        if author is None:
            raise NotRegistered("You must be registered to comment on a product.")
        check_caller_binding(author, caller, self.enforce_caller_binding)
        product = self.get_live_product(data.productname)

        product.comments.append(
            CommentRead(
                id=generate_id(),
                by=data.by,
                comment=data.comment,
                product=data.productname,
                commented_at=utcnow(),
            )
        )
        self.storage.products.insert(product.name, product)
        logger.info("User %s commented on %s", data.by, product.name)
        return "Comment sent successfully."

    async def like_product(self, data: LikeCreate, caller: str) -> str:
        """Record a like from ``caller``.  Repeated likes are all kept."""
        require(data.productname, message="Product name is missing.")
        product = self.get_live_product(data.productname)
        product.likes.append(caller)
        self.storage.products.insert(product.name, product)
        logger.info("Caller %s liked %s (%d likes)", caller, product.name, len(product.likes))
        return "Like added successfully."

    async def delete_product(self, productname: str, caller: str) -> str:
        """Delete a product and drop it from its owner's product list."""
        product = self.get_live_product(productname)
        owner = self.storage.users.get(product.owner)
        if owner is None:
            raise UserNotFound("Owner not found.")
        check_caller_binding(owner, caller, self.enforce_caller_binding)

        owner.products = [name for name in owner.products if name != productname]
        self.storage.users.insert(owner.username, owner)

        if self.delete_mode == DELETE_MODE_TOMBSTONE:
            product.deleted_at = utcnow()
            self.storage.products.insert(productname, product)
        else:
            self.storage.products.remove(productname)
        logger.info("Deleted product %s (%s)", productname, self.delete_mode)
        return "Product deleted successfully."

    def _release(self, username: str, productname: str) -> None:
        previous_owner: Optional[UserRead] = self.storage.users.get(username)
        if previous_owner is None or productname not in previous_owner.products:
            return
        previous_owner.products.remove(productname)
        self.storage.users.insert(username, previous_owner)
