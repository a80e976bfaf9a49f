"""
Top‑level router for version 1 of the API.

Aggregates the domain routers under their prefixes.  When a new domain
is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import enquiries, info, products, questions, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(questions.router, prefix="/questions", tags=["questions"])
router.include_router(enquiries.router, prefix="/enquiries", tags=["enquiries"])
router.include_router(info.router, prefix="/info", tags=["info"])
