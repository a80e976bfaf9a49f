"""
Service layer for product enquiries.

Enquiries are standalone records keyed by their generated id.  The
product is only checked for availability at submission time; the
enquiry keeps the product name as plain text afterwards.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..core.identity import generate_id, utcnow
from ..core.storage import Storage
from ..schemas.enquiry import EnquiryCreate, EnquiryRead
from .errors import require
from .product_service import ProductService

logger = logging.getLogger(__name__)


class EnquiryService:
    """Service class for submitting and reading enquiries."""

    def __init__(self, storage: Storage, products: ProductService) -> None:
        self.storage = storage
        self.products = products

    async def enquire_about_product(self, data: EnquiryCreate) -> str:
        require(data.enquire, data.productname, data.useremail)
        self.products.get_live_product(data.productname)
        enquiry = EnquiryRead(
            id=generate_id(),
            productname=data.productname,
            useremail=data.useremail,
            enquire=data.enquire,
            created_at=utcnow(),
        )
        self.storage.enquiries.insert(enquiry.id, enquiry)
        logger.info("Stored enquiry %s about %s", enquiry.id, data.productname)
        return "Enquiry submitted successfully."

    async def list_enquiries(self, productname: Optional[str] = None) -> List[EnquiryRead]:
        """Return enquiries in submission order, optionally for one product."""
        enquiries = self.storage.enquiries.values()
        if productname:
            enquiries = [enquiry for enquiry in enquiries if enquiry.productname == productname]
        return enquiries
