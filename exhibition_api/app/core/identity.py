"""
Record identifiers, timestamps and the anonymous caller principal.
"""

import uuid
from datetime import datetime, timezone

# Principal used for callers that present no bearer token.
ANONYMOUS_PRINCIPAL = "2vxsx-fae"


def generate_id() -> str:
    """Return a new random UUID4 string for a record."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
