"""
Dependencies shared by the endpoint modules.
"""

from fastapi import HTTPException, Request

from ..services.errors import RegistryError
from ..services.registry import ExhibitionRegistry


def get_registry(request: Request) -> ExhibitionRegistry:
    """Return the registry built by ``create_app`` for this application."""
    return request.app.state.registry


def http_error(exc: RegistryError) -> HTTPException:
    """Translate a registry failure into an HTTP error with a tagged detail."""
    return HTTPException(status_code=exc.status_code, detail=exc.to_detail())
