"""
Enquiry endpoints for API v1.

An enquiry must name a product that is currently showcased.  Listing
accepts an optional ``productname`` filter.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from exhibition_api.app.api.deps import get_registry, http_error
from exhibition_api.app.schemas.common import Confirmation
from exhibition_api.app.schemas.enquiry import EnquiryCreate, EnquiryRead
from exhibition_api.app.services.errors import RegistryError
from exhibition_api.app.services.registry import ExhibitionRegistry

router = APIRouter()


@router.post("/", response_model=Confirmation, status_code=status.HTTP_201_CREATED)
async def enquire_about_product(
    enquiry: EnquiryCreate,
    registry: ExhibitionRegistry = Depends(get_registry),
) -> Confirmation:
    try:
        message = await registry.enquiries.enquire_about_product(enquiry)
    except RegistryError as e:
        raise http_error(e) from e
    return Confirmation(message=message)


@router.get("/", response_model=List[EnquiryRead])
async def list_enquiries(
    productname: Optional[str] = Query(None, description="Only return enquiries about this product"),
    registry: ExhibitionRegistry = Depends(get_registry),
) -> List[EnquiryRead]:
    return await registry.enquiries.list_enquiries(productname)
