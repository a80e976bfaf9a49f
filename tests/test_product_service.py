from __future__ import annotations

import asyncio
import sqlite3

import pytest

from exhibition_api.app.core.identity import ANONYMOUS_PRINCIPAL
from exhibition_api.app.core.storage import Storage
from exhibition_api.app.schemas.enquiry import EnquiryCreate
from exhibition_api.app.schemas.product import CommentCreate, LikeCreate, ProductCreate
from exhibition_api.app.schemas.user import UserCreate
from exhibition_api.app.services.errors import (
    CallerMismatch,
    InvalidName,
    MissingCredentials,
    NotRegistered,
    ProductNotAvailable,
    RegistrationFailed,
    UserNotFound,
)
from exhibition_api.app.services.registry import ExhibitionRegistry

WIDGET = ProductCreate(name="Widget", description="A hand-made widget", owner="alice")


def _register(registry: ExhibitionRegistry, username: str, caller: str = "p") -> None:
    asyncio.run(
        registry.users.register_user(
            UserCreate(username=username, email=f"{username}@x.com", usercontacts="555-0100"),
            caller,
        )
    )


@pytest.fixture
def with_widget(registry: ExhibitionRegistry) -> ExhibitionRegistry:
    _register(registry, "alice", "principal-a")
    asyncio.run(registry.products.register_product(WIDGET, "principal-a"))
    return registry


def test_register_product_requires_registered_owner(registry: ExhibitionRegistry) -> None:
    with pytest.raises(NotRegistered) as excinfo:
        asyncio.run(registry.products.register_product(WIDGET, "p"))
    assert excinfo.value.tag == "not-registered"
    assert asyncio.run(registry.products.list_products()) == []


def test_register_product_requires_all_fields(registry: ExhibitionRegistry) -> None:
    _register(registry, "alice")
    with pytest.raises(MissingCredentials):
        asyncio.run(registry.products.register_product(ProductCreate(name="Widget", owner="alice"), "p"))


def test_search_returns_registered_product(with_widget: ExhibitionRegistry) -> None:
    product = asyncio.run(with_widget.products.search_product("Widget"))
    assert product.name == "Widget"
    assert product.owner == "alice"
    assert product.description == "A hand-made widget"
    assert product.comments == []
    assert product.likes == []

    owner = asyncio.run(with_widget.users.get_user("alice"))
    assert owner.products == ["Widget"]


def test_search_unknown_and_empty_names(registry: ExhibitionRegistry) -> None:
    with pytest.raises(ProductNotAvailable, match="Product with name Nope is not available."):
        asyncio.run(registry.products.search_product("Nope"))
    with pytest.raises(MissingCredentials, match="Product name field is empty."):
        asyncio.run(registry.products.search_product(""))


def test_comment_requires_registered_author(with_widget: ExhibitionRegistry) -> None:
    comment = CommentCreate(by="bob", comment="Nice!", productname="Widget")
    with pytest.raises(NotRegistered):
        asyncio.run(with_widget.products.comment_on_product(comment, "pb"))

    _register(with_widget, "bob", "pb")
    message = asyncio.run(with_widget.products.comment_on_product(comment, "pb"))
    assert message == "Comment sent successfully."

    product = asyncio.run(with_widget.products.search_product("Widget"))
    assert len(product.comments) == 1
    assert product.comments[0].by == "bob"
    assert product.comments[0].comment == "Nice!"
    assert product.comments[0].product == "Widget"


def test_comments_are_appended_in_order(with_widget: ExhibitionRegistry) -> None:
    for text in ("first", "second", "third"):
        asyncio.run(
            with_widget.products.comment_on_product(
                CommentCreate(by="alice", comment=text, productname="Widget"), "principal-a"
            )
        )
    product = asyncio.run(with_widget.products.search_product("Widget"))
    assert [c.comment for c in product.comments] == ["first", "second", "third"]
    assert len({c.id for c in product.comments}) == 3


def test_comment_on_missing_product(with_widget: ExhibitionRegistry) -> None:
    with pytest.raises(ProductNotAvailable):
        asyncio.run(
            with_widget.products.comment_on_product(
                CommentCreate(by="alice", comment="?", productname="Gadget"), "principal-a"
            )
        )


def test_likes_are_not_deduplicated(with_widget: ExhibitionRegistry) -> None:
    like = LikeCreate(productname="Widget")
    assert asyncio.run(with_widget.products.like_product(like, "fan")) == "Like added successfully."
    asyncio.run(with_widget.products.like_product(like, "fan"))
    asyncio.run(with_widget.products.like_product(like, ANONYMOUS_PRINCIPAL))

    product = asyncio.run(with_widget.products.search_product("Widget"))
    assert product.likes == ["fan", "fan", ANONYMOUS_PRINCIPAL]


def test_like_failures(with_widget: ExhibitionRegistry) -> None:
    with pytest.raises(MissingCredentials, match="Product name is missing."):
        asyncio.run(with_widget.products.like_product(LikeCreate(), "fan"))
    with pytest.raises(ProductNotAvailable):
        asyncio.run(with_widget.products.like_product(LikeCreate(productname="Gadget"), "fan"))


def test_hard_delete_removes_product_and_owner_entry(with_widget: ExhibitionRegistry) -> None:
    message = asyncio.run(with_widget.products.delete_product("Widget", "principal-a"))
    assert message == "Product deleted successfully."

    assert with_widget.storage.products.get("Widget") is None
    assert asyncio.run(with_widget.users.get_user("alice")).products == []
    with pytest.raises(ProductNotAvailable):
        asyncio.run(with_widget.products.search_product("Widget"))
    with pytest.raises(ProductNotAvailable):
        asyncio.run(with_widget.products.delete_product("Widget", "principal-a"))


def test_delete_with_missing_owner(with_widget: ExhibitionRegistry) -> None:
    with_widget.storage.users.remove("alice")
    with pytest.raises(UserNotFound, match="Owner not found."):
        asyncio.run(with_widget.products.delete_product("Widget", "principal-a"))
    assert with_widget.storage.products.get("Widget") is not None


def test_tombstone_delete_keeps_hidden_record(storage: Storage) -> None:
    registry = ExhibitionRegistry.create(storage, delete_mode="tombstone")
    _register(registry, "alice", "pa")
    asyncio.run(registry.products.register_product(WIDGET, "pa"))
    asyncio.run(
        registry.products.comment_on_product(
            CommentCreate(by="alice", comment="keep me", productname="Widget"), "pa"
        )
    )

    asyncio.run(registry.products.delete_product("Widget", "pa"))

    assert asyncio.run(registry.products.list_products()) == []
    with pytest.raises(ProductNotAvailable):
        asyncio.run(registry.products.search_product("Widget"))
    with pytest.raises(ProductNotAvailable):
        asyncio.run(registry.products.like_product(LikeCreate(productname="Widget"), "fan"))
    with pytest.raises(ProductNotAvailable):
        asyncio.run(
            registry.products.comment_on_product(
                CommentCreate(by="alice", comment="too late", productname="Widget"), "pa"
            )
        )
    with pytest.raises(ProductNotAvailable):
        asyncio.run(
            registry.enquiries.enquire_about_product(
                EnquiryCreate(productname="Widget", useremail="b@x.com", enquire="Still for sale?")
            )
        )
    with pytest.raises(ProductNotAvailable):
        asyncio.run(registry.products.delete_product("Widget", "pa"))
    assert asyncio.run(registry.enquiries.list_enquiries()) == []
    tombstone = storage.products.get("Widget")
    assert tombstone is not None
    assert tombstone.deleted_at is not None
    assert [c.comment for c in tombstone.comments] == ["keep me"]
    assert asyncio.run(registry.users.get_user("alice")).products == []

    # Registering the name again replaces the tombstone.
    asyncio.run(registry.products.register_product(WIDGET, "pa"))
    revived = asyncio.run(registry.products.search_product("Widget"))
    assert revived.deleted_at is None
    assert revived.comments == []


def test_reregistering_moves_product_to_new_owner(with_widget: ExhibitionRegistry) -> None:
    _register(with_widget, "bob", "pb")
    asyncio.run(with_widget.products.like_product(LikeCreate(productname="Widget"), "fan"))

    replacement = ProductCreate(name="Widget", description="Bob's widget", owner="bob")
    asyncio.run(with_widget.products.register_product(replacement, "pb"))

    product = asyncio.run(with_widget.products.search_product("Widget"))
    assert product.owner == "bob"
    assert product.likes == []
    assert asyncio.run(with_widget.users.get_user("alice")).products == []
    assert asyncio.run(with_widget.users.get_user("bob")).products == ["Widget"]
    assert len(asyncio.run(with_widget.products.list_products())) == 1


def test_caller_binding(storage: Storage) -> None:
    registry = ExhibitionRegistry.create(storage, enforce_caller_binding=True)
    _register(registry, "alice", "pa")
    _register(registry, "bob", "pb")

    with pytest.raises(CallerMismatch):
        asyncio.run(registry.products.register_product(WIDGET, "pb"))
    asyncio.run(registry.products.register_product(WIDGET, "pa"))

    with pytest.raises(CallerMismatch) as excinfo:
        asyncio.run(
            registry.products.comment_on_product(
                CommentCreate(by="alice", comment="impostor", productname="Widget"), "pb"
            )
        )
    assert excinfo.value.tag == "caller-mismatch"
    with pytest.raises(CallerMismatch):
        asyncio.run(registry.products.delete_product("Widget", "pb"))

    # Likes are open to every caller.
    asyncio.run(registry.products.like_product(LikeCreate(productname="Widget"), "pb"))
    asyncio.run(registry.products.delete_product("Widget", "pa"))


def test_caller_binding_blocks_takeover_by_reregistration(storage: Storage) -> None:
    registry = ExhibitionRegistry.create(storage, enforce_caller_binding=True)
    _register(registry, "alice", "pa")
    _register(registry, "bob", "pb")
    asyncio.run(registry.products.register_product(WIDGET, "pa"))
    asyncio.run(registry.products.like_product(LikeCreate(productname="Widget"), "fan"))

    takeover = ProductCreate(name="Widget", description="Mine now", owner="bob")
    with pytest.raises(CallerMismatch):
        asyncio.run(registry.products.register_product(takeover, "pb"))

    product = asyncio.run(registry.products.search_product("Widget"))
    assert product.owner == "alice"
    assert product.likes == ["fan"]
    assert asyncio.run(registry.users.get_user("alice")).products == ["Widget"]
    assert asyncio.run(registry.users.get_user("bob")).products == []

    # The current owner may still hand the name over, and a deleted name is free again.
    asyncio.run(registry.products.delete_product("Widget", "pa"))
    asyncio.run(registry.products.register_product(takeover, "pb"))
    assert asyncio.run(registry.products.search_product("Widget")).owner == "bob"


def test_product_name_with_slash_is_refused(with_widget: ExhibitionRegistry) -> None:
    with pytest.raises(InvalidName) as excinfo:
        asyncio.run(
            with_widget.products.register_product(
                ProductCreate(name="A/B", description="d", owner="alice"), "principal-a"
            )
        )
    assert excinfo.value.tag == "invalid-name"
    assert with_widget.storage.products.get("A/B") is None
    assert asyncio.run(with_widget.users.get_user("alice")).products == ["Widget"]


def test_failed_product_write_is_reported(with_widget: ExhibitionRegistry, monkeypatch) -> None:
    def failing_insert(key, record) -> None:
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(with_widget.storage.products, "insert", failing_insert)
    with pytest.raises(RegistrationFailed) as excinfo:
        asyncio.run(
            with_widget.products.register_product(
                ProductCreate(name="Gadget", description="d", owner="alice"), "principal-a"
            )
        )
    assert excinfo.value.tag == "registration-failed"
    assert excinfo.value.status_code == 500
    # The owner record is not touched when the product write fails.
    assert asyncio.run(with_widget.users.get_user("alice")).products == ["Widget"]
