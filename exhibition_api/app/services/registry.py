"""
The exhibition registry: every service bound to one ``Storage``.

A registry is built once per application (see ``create_app``) and
handed to the endpoints through ``request.app.state``.  Building two
registries over different database files gives two fully isolated
instances.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.config import DELETE_MODE_HARD, Settings, settings as default_settings
from ..core.db import get_database_path
from ..core.storage import Storage
from .enquiry_service import EnquiryService
from .product_service import ProductService
from .question_service import QuestionService
from .user_service import UserService


@dataclass
class ExhibitionRegistry:
    storage: Storage
    users: UserService
    products: ProductService
    enquiries: EnquiryService
    questions: QuestionService

    @classmethod
    def create(
        cls,
        storage: Storage,
        *,
        delete_mode: str = DELETE_MODE_HARD,
        enforce_caller_binding: bool = False,
    ) -> "ExhibitionRegistry":
        products = ProductService(
            storage,
            delete_mode=delete_mode,
            enforce_caller_binding=enforce_caller_binding,
        )
        return cls(
            storage=storage,
            users=UserService(storage, enforce_caller_binding=enforce_caller_binding),
            products=products,
            enquiries=EnquiryService(storage, products),
            questions=QuestionService(storage),
        )

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ExhibitionRegistry":
        """Bind a registry to the configured database without opening it.

        Call ``storage.initialise()`` (done at application startup)
        before the first operation.
        """
        config = config or default_settings
        storage = Storage.at(get_database_path(config.database_url))
        return cls.create(
            storage,
            delete_mode=config.product_delete_mode,
            enforce_caller_binding=config.enforce_caller_binding,
        )
