"""
Information endpoint for API v1.

Reports the service name, version and the behaviour switches the
registry runs with, plus the number of live products.  Publicly
accessible; useful as a health check.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from exhibition_api.app.api.deps import get_registry
from exhibition_api.app.services.registry import ExhibitionRegistry

router = APIRouter()


@router.get("/health", response_model=Dict[str, Any])
async def health(
    request: Request,
    registry: ExhibitionRegistry = Depends(get_registry),
) -> Dict[str, Any]:
    config = request.app.state.settings
    products = await registry.products.list_products()
    return {
        "status": "ok",
        "project": config.project_name,
        "version": config.api_version,
        "product_delete_mode": config.product_delete_mode,
        "enforce_caller_binding": config.enforce_caller_binding,
        "products": len(products),
    }
